from pydantic import BaseModel
from typing import Optional, List, Dict, Any
from datetime import datetime


class Candidate(BaseModel):
    """A tutor profile as shown on a discovery card. Immutable for the lifetime of a discovery session."""
    id: str
    first_name: str
    last_name: str
    university: Optional[str] = None
    major: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    hourly_rate: Optional[float] = None
    rating: Optional[float] = None
    verified: bool = False
    subjects: List[str] = []

    class Config:
        frozen = True

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Candidate":
        """Parse a profiles row with nested tutor_subjects -> subjects into a Candidate"""
        subjects = []
        for tutor_subject in row.get("tutor_subjects") or []:
            subject = tutor_subject.get("subjects") or tutor_subject.get("subject") or {}
            if subject.get("name"):
                subjects.append(subject["name"])
        return cls(
            id=row["id"],
            first_name=row.get("first_name") or "",
            last_name=row.get("last_name") or "",
            university=row.get("university"),
            major=row.get("major"),
            bio=row.get("bio"),
            avatar_url=row.get("avatar_url"),
            hourly_rate=row.get("hourly_rate"),
            rating=row.get("rating"),
            verified=bool(row.get("verified")),
            subjects=subjects,
        )


class ProfileResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    university: Optional[str] = None
    major: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    rating: Optional[float] = None
    hourly_rate: Optional[float] = None
    verified: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    university: Optional[str] = None
    major: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    hourly_rate: Optional[float] = None
