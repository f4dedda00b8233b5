from supabase import Client
from tutormatch.modules.messages.schemas import (
    ConversationResponse, ConversationListResponse, MessageResponse
)
from typing import List, Dict, Any
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

CONVERSATION_SELECT = (
    "*, "
    "match:matches(student_id, tutor_id, "
    "student:profiles!matches_student_id_fkey(first_name, last_name, avatar_url), "
    "tutor:profiles!matches_tutor_id_fkey(first_name, last_name, avatar_url)), "
    "messages(content, created_at, sender_id)"
)


def _latest_message(messages: List[Dict[str, Any]]):
    if not messages:
        return None
    return max(messages, key=lambda m: m.get("created_at") or "")


class MessageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_conversations(self, user_id: str) -> ConversationListResponse:
        """List conversations for the user's matched matches, most recently active first"""
        try:
            matches_result = self.supabase.table("matches")\
                .select("id")\
                .or_(f"student_id.eq.{user_id},tutor_id.eq.{user_id}")\
                .eq("status", "matched")\
                .execute()
            match_ids = [m["id"] for m in matches_result.data or []]
            if not match_ids:
                return ConversationListResponse(conversations=[], empty=True)

            result = self.supabase.table("conversations")\
                .select(CONVERSATION_SELECT)\
                .in_("match_id", match_ids)\
                .order("updated_at", desc=True)\
                .execute()

            conversations = []
            for row in result.data or []:
                messages = row.pop("messages", None) or []
                row["last_message"] = _latest_message(messages)
                conversations.append(ConversationResponse(**row))
            return ConversationListResponse(conversations=conversations, empty=not conversations)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing conversations for {user_id}: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to load conversations: {str(e)}")

    def get_conversation_participants(self, conversation_id: str) -> Dict[str, Any]:
        """Return the match row (student_id, tutor_id) behind a conversation"""
        try:
            result = self.supabase.table("conversations")\
                .select("id, match:matches(student_id, tutor_id)")\
                .eq("id", conversation_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Conversation not found")
            return result.data.get("match") or {}
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_messages(self, conversation_id: str) -> List[MessageResponse]:
        """Messages of a conversation in chronological order"""
        try:
            result = self.supabase.table("messages")\
                .select("*, sender:profiles(first_name, last_name, avatar_url)")\
                .eq("conversation_id", conversation_id)\
                .order("created_at", desc=False)\
                .execute()
            return [MessageResponse(**message) for message in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=502, detail=f"Failed to load messages: {str(e)}")

    def send_message(self, conversation_id: str, sender_id: str, content: str) -> MessageResponse:
        """Insert a message and bump the conversation's updated_at"""
        try:
            result = self.supabase.table("messages").insert({
                "conversation_id": conversation_id,
                "sender_id": sender_id,
                "content": content
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send message")

            self.supabase.table("conversations")\
                .update({"updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", conversation_id)\
                .execute()

            return MessageResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error sending message to conversation {conversation_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_conversation(self, match_id: str) -> ConversationResponse:
        """Open a conversation for a match; returns the existing one if already open"""
        try:
            existing = self.supabase.table("conversations")\
                .select("*")\
                .eq("match_id", match_id)\
                .execute()
            if existing.data:
                return ConversationResponse(**existing.data[0])

            result = self.supabase.table("conversations").insert({
                "match_id": match_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create conversation")

            return ConversationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
