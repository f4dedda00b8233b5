from pydantic import BaseModel
from typing import Optional, Dict, Any, Literal
from datetime import datetime

MatchStatus = Literal["pending", "matched", "rejected"]


class MatchCreate(BaseModel):
    tutor_id: str


class MatchStatusUpdate(BaseModel):
    status: MatchStatus


class MatchResponse(BaseModel):
    id: str
    student_id: str
    tutor_id: str
    status: MatchStatus
    created_at: datetime

    class Config:
        from_attributes = True


class MatchWithProfilesResponse(MatchResponse):
    student: Optional[Dict[str, Any]] = None
    tutor: Optional[Dict[str, Any]] = None
