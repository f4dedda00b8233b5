"""
Core dependencies for resolving the caller's identity
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from tutormatch.database.supabase_client import get_supabase
from tutormatch.core.auth import AuthService
from supabase import Client
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def is_student(user_data: dict) -> bool:
    return user_data.get("role") == "student"


def require_student(user_data: dict = Depends(get_current_user_id)) -> dict:
    """Only students browse tutors and create matches"""
    if not is_student(user_data):
        logger.info(f"Rejected discovery request from non-student user {user_data.get('id')}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only students can discover and match with tutors"
        )
    return user_data


def check_participant(user_id: str, row: dict, resource: str = "Resource") -> None:
    """Raise 403 unless user_id is the student or the tutor on a student/tutor row"""
    if user_id not in (row.get("student_id"), row.get("tutor_id")):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"{resource} does not belong to the current user"
        )
