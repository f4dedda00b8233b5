from supabase import Client
from tutormatch.modules.sessions.schemas import (
    SessionCreate, SessionUpdate, SessionResponse, SessionListResponse
)
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

SESSION_SELECT = (
    "*, "
    "study_plan:study_plans(title, subject, student_id, tutor_id, "
    "student:profiles!study_plans_student_id_fkey(first_name, last_name), "
    "tutor:profiles!study_plans_tutor_id_fkey(first_name, last_name))"
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def split_sessions(sessions: List[SessionResponse], now: Optional[datetime] = None) -> SessionListResponse:
    """Upcoming = still scheduled and in the future; everything completed or already due is past.
    Cancelled sessions are listed in neither."""
    now = _as_utc(now or datetime.now(timezone.utc))
    upcoming, past = [], []
    for session in sessions:
        if session.status == "scheduled" and _as_utc(session.scheduled_at) > now:
            upcoming.append(session)
        elif session.status != "cancelled":
            past.append(session)
    return SessionListResponse(upcoming=upcoming, past=past)


class SessionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_sessions(self, user_id: str, now: Optional[datetime] = None) -> SessionListResponse:
        """List sessions of every study plan the user takes part in, split into upcoming and past"""
        try:
            plans_result = self.supabase.table("study_plans")\
                .select("id")\
                .or_(f"student_id.eq.{user_id},tutor_id.eq.{user_id}")\
                .execute()
            plan_ids = [p["id"] for p in plans_result.data or []]
            if not plan_ids:
                return SessionListResponse(upcoming=[], past=[])

            result = self.supabase.table("sessions")\
                .select(SESSION_SELECT)\
                .in_("study_plan_id", plan_ids)\
                .order("scheduled_at", desc=False)\
                .execute()
            sessions = [SessionResponse(**s) for s in result.data or []]
            return split_sessions(sessions, now)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=502, detail=f"Failed to load sessions: {str(e)}")

    def get_session(self, session_id: str) -> SessionResponse:
        try:
            result = self.supabase.table("sessions")\
                .select(SESSION_SELECT)\
                .eq("id", session_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Session not found")

            return SessionResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_session(self, session_data: SessionCreate) -> SessionResponse:
        """Schedule a session under a study plan"""
        try:
            insert_data = session_data.model_dump(mode="json")
            insert_data["status"] = "scheduled"
            result = self.supabase.table("sessions").insert(insert_data).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create session")

            logger.info(f"Scheduled session {result.data[0]['id']} for plan {session_data.study_plan_id}")
            return SessionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_session(self, session_id: str, session_data: SessionUpdate) -> SessionResponse:
        try:
            update_data = session_data.model_dump(exclude_none=True, mode="json")
            if not update_data:
                return self.get_session(session_id)

            result = self.supabase.table("sessions")\
                .update(update_data)\
                .eq("id", session_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Session not found")

            return SessionResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
