from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException

from tutormatch.core.auth import AuthService, clear_auth_cache
from tutormatch.core.dependencies import require_student, check_participant


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_auth_cache()
    yield
    clear_auth_cache()


def auth_client(user, profile=None):
    supabase = MagicMock()
    supabase.auth.get_user.return_value = SimpleNamespace(user=user)
    supabase.table.return_value.select.return_value.eq.return_value\
        .maybe_single.return_value.execute.return_value = SimpleNamespace(data=profile)
    return supabase


class TestAuthService:

    def test_resolves_role_from_profile_and_caches(self):
        user = SimpleNamespace(id="tutor-1", email="ada@example.edu", user_metadata={})
        supabase = auth_client(user, profile={"role": "tutor"})
        service = AuthService(supabase)
        first = service.get_current_user("token-a")
        second = service.get_current_user("token-a")
        assert first["role"] == "tutor"
        assert second is first
        supabase.auth.get_user.assert_called_once_with(jwt="token-a")
        supabase.table.assert_called_once_with("profiles")

    def test_metadata_role_is_not_trusted(self):
        user = SimpleNamespace(id="user-1", email="sam@example.edu", user_metadata={"role": "student"})
        user_data = AuthService(auth_client(user, profile={"role": "tutor"})).get_current_user("token-b")
        assert user_data["role"] == "tutor"

    def test_user_without_profile_has_no_role(self):
        user = SimpleNamespace(id="user-2", email="new@example.edu", user_metadata=None)
        user_data = AuthService(auth_client(user, profile=None)).get_current_user("token-e")
        assert user_data["role"] is None
        with pytest.raises(HTTPException) as exc:
            require_student(user_data)
        assert exc.value.status_code == 403

    def test_profile_without_role_is_not_a_student(self):
        user = SimpleNamespace(id="user-3", email="new@example.edu", user_metadata={})
        user_data = AuthService(auth_client(user, profile={"role": None})).get_current_user("token-f")
        with pytest.raises(HTTPException) as exc:
            require_student(user_data)
        assert exc.value.status_code == 403

    def test_missing_user_is_401(self):
        with pytest.raises(HTTPException) as exc:
            AuthService(auth_client(None)).get_current_user("token-c")
        assert exc.value.status_code == 401

    def test_expired_jwt_is_401(self):
        supabase = MagicMock()
        supabase.auth.get_user.side_effect = RuntimeError("JWT expired")
        with pytest.raises(HTTPException) as exc:
            AuthService(supabase).get_current_user("token-d")
        assert exc.value.detail == "Invalid or expired token"


class TestIdentityChecks:

    def test_require_student(self):
        assert require_student({"id": "s", "role": "student"})["id"] == "s"
        with pytest.raises(HTTPException) as exc:
            require_student({"id": "t", "role": "tutor"})
        assert exc.value.status_code == 403

    def test_check_participant(self):
        check_participant("s", {"student_id": "s", "tutor_id": "t"})
        with pytest.raises(HTTPException):
            check_participant("x", {"student_id": "s", "tutor_id": "t"})
