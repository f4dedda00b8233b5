from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime, date

StudyPlanStatus = Literal["active", "completed", "paused"]


class Goal(BaseModel):
    title: str
    completed: bool = False


class StudyPlanCreate(BaseModel):
    tutor_id: str
    title: str
    subject: str
    description: Optional[str] = None
    goals: List[Goal] = []
    due_date: Optional[date] = None


class StudyPlanUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    goals: Optional[List[Goal]] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[StudyPlanStatus] = None
    due_date: Optional[date] = None


class StudyPlanResponse(BaseModel):
    id: str
    student_id: str
    tutor_id: str
    title: str
    subject: str
    description: Optional[str] = None
    goals: List[Goal] = []
    progress: int = 0
    status: StudyPlanStatus
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    student: Optional[Dict[str, Any]] = None
    tutor: Optional[Dict[str, Any]] = None

    class Config:
        from_attributes = True
