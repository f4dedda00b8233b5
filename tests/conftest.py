"""
Shared pytest fixtures.

The Supabase client is replaced by FakeSupabase: every table() call
returns a chainable query that records its calls and, on execute(),
answers from a per-table queue of canned responses.
"""

import os
from concurrent.futures import Executor, Future
from typing import Any, Dict, List

import pytest

os.environ.setdefault("LOG_LEVEL", "WARNING")

from tutormatch.modules.profiles.schemas import Candidate


class FakeResult:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str):
        self.client = client
        self.table_name = table
        self.calls: List[tuple] = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def called(self, name: str) -> List[tuple]:
        return [args for call, args, _ in self.calls if call == name]

    def execute(self):
        self.client.executed.append(self)
        queue = self.client.responses.get(self.table_name)
        if not queue:
            return FakeResult([])
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return FakeResult(response)


class FakeSupabase:
    def __init__(self):
        self.responses: Dict[str, List[Any]] = {}
        self.executed: List[FakeQuery] = []

    def respond(self, table: str, *responses: Any) -> "FakeSupabase":
        """Queue responses for a table; the last one keeps answering."""
        self.responses.setdefault(table, []).extend(responses)
        return self

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def queries(self, table: str) -> List[FakeQuery]:
        return [q for q in self.executed if q.table_name == table]


class InlineExecutor(Executor):
    """Runs submitted work immediately on the calling thread."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def inline_executor():
    return InlineExecutor()


@pytest.fixture
def make_candidate():
    def _make(candidate_id: str, **overrides) -> Candidate:
        data = {
            "id": candidate_id,
            "first_name": candidate_id.title(),
            "last_name": "Tutor",
            "university": "State University",
            "major": "Mathematics",
            "hourly_rate": 40,
            "rating": 4.5,
            "verified": True,
            "subjects": ["Calculus"],
        }
        data.update(overrides)
        return Candidate(**data)
    return _make


@pytest.fixture
def profile_row():
    def _row(profile_id: str, **overrides) -> Dict[str, Any]:
        row = {
            "id": profile_id,
            "email": f"{profile_id}@example.edu",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "role": "tutor",
            "university": "State University",
            "major": "Computer Science",
            "bio": None,
            "avatar_url": None,
            "rating": 4.8,
            "hourly_rate": 35,
            "verified": True,
            "created_at": "2024-01-15T10:00:00+00:00",
            "updated_at": "2024-01-15T10:00:00+00:00",
            "tutor_subjects": [
                {"proficiency_level": "expert", "subjects": {"name": "Algorithms", "category": "CS"}},
                {"proficiency_level": "advanced", "subjects": {"name": "Calculus", "category": "Math"}},
            ],
        }
        row.update(overrides)
        return row
    return _row


@pytest.fixture
def match_row():
    def _row(match_id: str = "match-1", student_id: str = "student-1", tutor_id: str = "tutor-1", status: str = "pending"):
        return {
            "id": match_id,
            "student_id": student_id,
            "tutor_id": tutor_id,
            "status": status,
            "created_at": "2024-01-15T10:00:00+00:00",
        }
    return _row
