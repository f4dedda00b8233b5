from fastapi import APIRouter, Depends
from tutormatch.database.supabase_client import get_supabase
from tutormatch.modules.sessions.schemas import (
    SessionCreate, SessionUpdate, SessionResponse, SessionListResponse
)
from tutormatch.modules.sessions.service import SessionService
from tutormatch.modules.study_plans.service import StudyPlanService
from tutormatch.core.dependencies import get_current_user_id, check_participant
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/sessions", tags=["sessions"])


def get_session_service(supabase: Client = Depends(get_supabase)) -> SessionService:
    return SessionService(supabase)


def get_study_plan_service(supabase: Client = Depends(get_supabase)) -> StudyPlanService:
    return StudyPlanService(supabase)


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    current_user: Dict = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service)
):
    """Upcoming and past sessions of the current user"""
    return service.list_sessions(current_user["id"])


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    session_data: SessionCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service),
    plan_service: StudyPlanService = Depends(get_study_plan_service)
):
    """Schedule a session on one of the user's study plans"""
    plan = plan_service.get_study_plan(session_data.study_plan_id)
    check_participant(current_user["id"], plan.model_dump(), "Study plan")
    return service.create_session(session_data)


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: str,
    session_data: SessionUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: SessionService = Depends(get_session_service)
):
    """Reschedule, annotate, complete or cancel a session"""
    session = service.get_session(session_id)
    check_participant(current_user["id"], session.study_plan or {}, "Session")
    return service.update_session(session_id, session_data)
