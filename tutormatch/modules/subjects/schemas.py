from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

ProficiencyLevel = Literal["beginner", "intermediate", "advanced", "expert"]


class SubjectResponse(BaseModel):
    id: str
    name: str
    category: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubjectRef(BaseModel):
    name: str
    category: str


class TutorSubjectResponse(BaseModel):
    id: str
    tutor_id: str
    subject_id: str
    proficiency_level: ProficiencyLevel
    subject: Optional[SubjectRef] = None

    class Config:
        from_attributes = True
