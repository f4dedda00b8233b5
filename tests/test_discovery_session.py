"""
Discovery session end to end: provider -> filter -> stack -> gesture -> match recorder.

Match creation runs on an inline executor so its effects are visible
as soon as complete_animation() returns.
"""

import threading
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from tutormatch.modules.discovery.session import DiscoverySession
from tutormatch.modules.discovery.provider import CandidateProvider
from tutormatch.modules.discovery.recorder import MatchRecorder
from tutormatch.modules.discovery.registry import DiscoveryRegistry
from tutormatch.modules.discovery.schemas import FilterState
from tutormatch.modules.discovery.exceptions import (
    NoCandidateError, GestureBusyError, SessionNotFoundError
)
from tutormatch.modules.matches.schemas import MatchResponse

WIDTH = 400


@pytest.fixture
def profile_service():
    return MagicMock()


@pytest.fixture
def match_service():
    service = MagicMock()
    service.create_match.side_effect = lambda student_id, tutor_id: MatchResponse(
        id=f"match-{tutor_id}",
        student_id=student_id,
        tutor_id=tutor_id,
        status="pending",
        created_at="2024-01-15T10:00:00+00:00",
    )
    return service


@pytest.fixture
def build_session(profile_service, match_service, inline_executor):
    def _build(candidates, **kwargs):
        if isinstance(candidates, Exception):
            profile_service.list_tutors.side_effect = candidates
        else:
            profile_service.list_tutors.return_value = candidates
        session = DiscoverySession(
            user_id="student-1",
            provider=CandidateProvider(profile_service, limit=20),
            recorder=MatchRecorder(match_service, "student-1", inline_executor),
            container_width=WIDTH,
            **kwargs,
        )
        session.start()
        return session
    return _build


def swipe_by_drag(session, dx):
    session.drag(dx, 0)
    outcome = session.release()
    view = session.complete_animation()
    return outcome, view


class TestSwipeOutcomes:

    def test_short_drag_springs_back_without_side_effects(self, build_session, make_candidate, match_service):
        session = build_session([make_candidate("a"), make_candidate("b")])
        outcome, view = swipe_by_drag(session, WIDTH * 0.10)
        assert outcome.committed is False
        assert view.index == 0
        assert view.current.id == "a"
        match_service.create_match.assert_not_called()

    def test_right_drag_past_threshold_matches_once_and_advances(self, build_session, make_candidate, match_service):
        session = build_session([make_candidate("a"), make_candidate("b")])
        outcome, view = swipe_by_drag(session, WIDTH * 0.40)
        assert outcome.direction == "right"
        match_service.create_match.assert_called_once_with("student-1", "a")
        assert view.index == 1
        assert view.current.id == "b"

    def test_left_drag_advances_without_match(self, build_session, make_candidate, match_service):
        session = build_session([make_candidate("a"), make_candidate("b")])
        outcome, view = swipe_by_drag(session, -WIDTH * 0.40)
        assert outcome.direction == "left"
        match_service.create_match.assert_not_called()
        assert view.current.id == "b"

    def test_button_like_matches_same_as_drag(self, build_session, make_candidate, match_service):
        session = build_session([make_candidate("a"), make_candidate("b")])
        outcome = session.swipe("right")
        assert outcome.committed is True
        match_service.create_match.assert_not_called()
        view = session.complete_animation()
        match_service.create_match.assert_called_once_with("student-1", "a")
        assert view.index == 1

    def test_full_cycle_returns_to_start(self, build_session, make_candidate):
        candidates = [make_candidate(c) for c in "abcd"]
        session = build_session(candidates)
        for _ in candidates:
            session.swipe("left")
            view = session.complete_animation()
            assert 0 <= view.index < len(candidates)
        assert view.index == 0
        assert view.current.id == "a"

    def test_min_rating_scenario_single_candidate_wraps(self, build_session, make_candidate, match_service):
        session = build_session([make_candidate("A", rating=3), make_candidate("B", rating=5)])
        view = session.apply_filters(FilterState(min_rating=4))
        assert view.total == 1
        assert view.current.id == "B"
        _, view = swipe_by_drag(session, WIDTH * 0.40)
        match_service.create_match.assert_called_once_with("student-1", "B")
        assert view.index == 0
        assert view.current.id == "B"

    def test_failed_match_does_not_block_advance(self, build_session, make_candidate, match_service):
        match_service.create_match.side_effect = HTTPException(status_code=500, detail="insert failed")
        session = build_session([make_candidate("a"), make_candidate("b")])
        _, view = swipe_by_drag(session, WIDTH * 0.5)
        assert view.current.id == "b"
        assert [n.kind for n in view.notices] == ["error"]
        assert view.notices[0].tutor_id == "a"

    def test_successful_match_produces_notice_once(self, build_session, make_candidate):
        session = build_session([make_candidate("a"), make_candidate("b")])
        _, view = swipe_by_drag(session, WIDTH * 0.5)
        assert len(view.notices) == 1
        assert view.notices[0].kind == "match"
        assert view.notices[0].match_id == "match-a"
        assert session.view().notices == []

    def test_drag_locked_until_animation_completes(self, build_session, make_candidate):
        session = build_session([make_candidate("a"), make_candidate("b")])
        session.swipe("left")
        with pytest.raises(GestureBusyError):
            session.drag(10, 0)
        with pytest.raises(GestureBusyError):
            session.swipe("right")
        session.complete_animation()
        assert session.drag(10, 0).translate_x == 10


class TestViewStates:

    def test_empty_candidate_list(self, build_session):
        session = build_session([])
        view = session.view()
        assert view.status == "empty"
        assert view.empty_reason == "no_candidates"
        assert view.current is None
        assert view.gesture is None
        with pytest.raises(NoCandidateError):
            session.drag(50, 0)
        with pytest.raises(NoCandidateError):
            session.swipe("right")

    def test_filters_exclude_everything(self, build_session, make_candidate):
        session = build_session([make_candidate("a", verified=False)])
        view = session.apply_filters(FilterState(verified_only=True))
        assert view.status == "empty"
        assert view.empty_reason == "no_filter_matches"
        view = session.reset_filters()
        assert view.status == "showing"
        assert view.current.id == "a"

    def test_filter_change_resets_index(self, build_session, make_candidate):
        session = build_session([make_candidate(c) for c in "abc"])
        session.swipe("left")
        session.complete_animation()
        view = session.apply_filters(FilterState(max_price=500))
        assert view.index == 0
        assert view.current.id == "a"

    def test_filter_change_mid_drag_resets_gesture(self, build_session, make_candidate):
        session = build_session([make_candidate("a"), make_candidate("b")])
        session.drag(90, 10)
        view = session.apply_filters(FilterState(max_price=500))
        assert view.gesture.phase == "idle"
        assert view.gesture.translate_x == 0

    def test_fetch_failure_shows_error_and_retry_recovers(self, build_session, profile_service, make_candidate):
        session = build_session(HTTPException(status_code=502, detail="Failed to load tutors: timeout"))
        view = session.view()
        assert view.status == "error"
        assert view.error == "Failed to load tutors: timeout"
        assert view.available == 0

        profile_service.list_tutors.side_effect = None
        profile_service.list_tutors.return_value = [make_candidate("a")]
        view = session.refresh()
        assert view.status == "showing"
        assert view.current.id == "a"

    def test_candidates_fetched_once_per_start(self, build_session, profile_service, make_candidate):
        session = build_session([make_candidate("a")])
        session.start()
        profile_service.list_tutors.assert_called_once_with(limit=20)

    def test_showing_view_includes_next_card(self, build_session, make_candidate):
        view = build_session([make_candidate("a"), make_candidate("b")]).view()
        assert view.status == "showing"
        assert view.next.id == "b"
        assert view.available == 2


class TestCancellation:

    def test_closed_session_drops_results_and_refuses_likes(self, profile_service, match_service, make_candidate):
        pending = []

        class DeferredExecutor:
            def submit(self, fn, *args):
                pending.append((fn, args))
                return None

        profile_service.list_tutors.return_value = [make_candidate("a"), make_candidate("b")]
        recorder = MatchRecorder(match_service, "student-1", DeferredExecutor(), threading.Event())
        session = DiscoverySession("student-1", CandidateProvider(profile_service), recorder, WIDTH)
        session.start()
        session.swipe("right")
        session.complete_animation()
        assert len(pending) == 1

        session.close()
        fn, args = pending.pop()
        fn(*args)
        assert recorder.drain_notices() == []
        assert recorder.record("b") is None
        assert pending == []

    def test_cancel_racing_a_finished_match_leaves_no_notice(self, match_service, inline_executor):
        recorder = MatchRecorder(match_service, "student-1", inline_executor)

        class CancelOnAcquire:
            """Lets cancel() land between the worker finishing and its notice being queued."""

            def __init__(self, lock):
                self.lock = lock

            def __enter__(self):
                recorder.cancel_event.set()
                return self.lock.__enter__()

            def __exit__(self, *exc):
                return self.lock.__exit__(*exc)

        recorder._lock = CancelOnAcquire(threading.Lock())
        recorder.record("a")
        recorder._lock = recorder._lock.lock
        assert recorder.drain_notices() == []
        match_service.create_match.assert_called_once_with("student-1", "a")


class TestRegistry:

    def test_register_replaces_and_closes_previous(self, build_session, make_candidate):
        registry = DiscoveryRegistry()
        first = build_session([make_candidate("a")])
        second = build_session([make_candidate("a")])
        registry.register(first)
        registry.register(second)
        assert registry.get("student-1") is second
        assert first.closed is True
        assert len(registry) == 1

    def test_missing_session(self):
        with pytest.raises(SessionNotFoundError):
            DiscoveryRegistry().get("nobody")

    def test_close(self, build_session, make_candidate):
        registry = DiscoveryRegistry()
        session = build_session([make_candidate("a")])
        registry.register(session)
        assert registry.close("student-1") is True
        assert session.closed is True
        assert registry.close("student-1") is False
