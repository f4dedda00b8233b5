from fastapi import APIRouter, Depends
from tutormatch.database.supabase_client import get_supabase
from tutormatch.modules.messages.schemas import (
    ConversationCreate, ConversationResponse, ConversationListResponse,
    MessageCreate, MessageResponse
)
from tutormatch.modules.messages.service import MessageService
from tutormatch.modules.matches.service import MatchService
from tutormatch.core.dependencies import get_current_user_id, check_participant
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/conversations", tags=["messages"])


def get_message_service(supabase: Client = Depends(get_supabase)) -> MessageService:
    return MessageService(supabase)


def get_match_service(supabase: Client = Depends(get_supabase)) -> MatchService:
    return MatchService(supabase)


@router.get("", response_model=ConversationListResponse)
async def list_conversations(
    current_user: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    """List the current user's conversations"""
    return service.list_conversations(current_user["id"])


@router.post("", response_model=ConversationResponse, status_code=201)
async def create_conversation(
    conversation_data: ConversationCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service),
    match_service: MatchService = Depends(get_match_service)
):
    """Open a conversation for one of the user's matches"""
    match = match_service.get_match_by_id(conversation_data.match_id)
    check_participant(current_user["id"], match.model_dump(), "Match")
    return service.create_conversation(conversation_data.match_id)


@router.get("/{conversation_id}/messages", response_model=List[MessageResponse])
async def get_messages(
    conversation_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    """Get messages of a conversation (participants only)"""
    check_participant(current_user["id"], service.get_conversation_participants(conversation_id), "Conversation")
    return service.get_messages(conversation_id)


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    conversation_id: str,
    message_data: MessageCreate,
    current_user: Dict = Depends(get_current_user_id),
    service: MessageService = Depends(get_message_service)
):
    """Send a message as the current user"""
    check_participant(current_user["id"], service.get_conversation_participants(conversation_id), "Conversation")
    return service.send_message(conversation_id, current_user["id"], message_data.content)
