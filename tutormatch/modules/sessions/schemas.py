from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

SessionType = Literal["video", "in_person"]
SessionStatus = Literal["scheduled", "completed", "cancelled"]


class SessionCreate(BaseModel):
    study_plan_id: str
    scheduled_at: datetime
    duration_minutes: int = Field(..., gt=0, le=480)
    type: SessionType
    location: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def require_location_in_person(self):
        if self.type == "in_person" and not self.location:
            raise ValueError("location is required for in_person sessions")
        return self


class SessionUpdate(BaseModel):
    scheduled_at: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, gt=0, le=480)
    location: Optional[str] = None
    status: Optional[SessionStatus] = None
    notes: Optional[str] = None


class SessionResponse(BaseModel):
    id: str
    study_plan_id: str
    scheduled_at: datetime
    duration_minutes: int
    type: SessionType
    location: Optional[str] = None
    status: SessionStatus
    notes: Optional[str] = None
    created_at: datetime
    study_plan: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True


class SessionListResponse(BaseModel):
    upcoming: List[SessionResponse]
    past: List[SessionResponse]
