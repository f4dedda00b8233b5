from fastapi import APIRouter, Depends, HTTPException
from tutormatch.database.supabase_client import get_supabase
from tutormatch.modules.matches.schemas import (
    MatchCreate, MatchStatusUpdate, MatchResponse, MatchWithProfilesResponse
)
from tutormatch.modules.matches.service import MatchService
from tutormatch.modules.messages.service import MessageService
from tutormatch.core.dependencies import get_current_user_id, require_student
from supabase import Client
from typing import List, Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/matches", tags=["matches"])


def get_match_service(supabase: Client = Depends(get_supabase)) -> MatchService:
    return MatchService(supabase)


def get_message_service(supabase: Client = Depends(get_supabase)) -> MessageService:
    return MessageService(supabase)


@router.get("", response_model=List[MatchWithProfilesResponse])
async def list_matches(
    current_user: Dict = Depends(get_current_user_id),
    service: MatchService = Depends(get_match_service)
):
    """List matches where the current user is the student or the tutor"""
    return service.list_matches(current_user["id"])


@router.post("", response_model=MatchResponse, status_code=201)
async def create_match(
    match_data: MatchCreate,
    current_user: Dict = Depends(require_student),
    service: MatchService = Depends(get_match_service)
):
    """Like a tutor outside of the swipe stack (e.g. from a profile page)"""
    return service.create_match(current_user["id"], match_data.tutor_id)


@router.put("/{match_id}/status", response_model=MatchResponse)
async def update_match_status(
    match_id: str,
    status_data: MatchStatusUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: MatchService = Depends(get_match_service),
    message_service: MessageService = Depends(get_message_service)
):
    """Accept or decline a match (tutor only). Accepting opens a conversation."""
    match = service.get_match_by_id(match_id)
    if match.tutor_id != current_user["id"]:
        raise HTTPException(status_code=403, detail="Only the matched tutor can change the match status")
    updated = service.update_match_status(match_id, status_data.status)
    if updated.status == "matched":
        message_service.create_conversation(match_id)
        logger.info(f"Opened conversation for match {match_id}")
    return updated
