from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
from datetime import datetime


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=4000)


class MessageResponse(BaseModel):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    created_at: datetime
    sender: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class ConversationCreate(BaseModel):
    match_id: str


class ConversationResponse(BaseModel):
    id: str
    match_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    match: Optional[Dict[str, Any]] = None
    last_message: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class ConversationListResponse(BaseModel):
    conversations: List[ConversationResponse]
    # Empty list is not an error; clients render a "start matching" empty state
    empty: bool
