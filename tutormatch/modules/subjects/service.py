from supabase import Client
from tutormatch.modules.subjects.schemas import SubjectResponse, TutorSubjectResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class SubjectService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_subjects(self) -> List[SubjectResponse]:
        """All subjects, grouped by category. Names here are the values the discovery subject filter matches."""
        try:
            result = self.supabase.table("subjects")\
                .select("*")\
                .order("category")\
                .order("name")\
                .execute()
            return [SubjectResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error listing subjects: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to load subjects: {str(e)}")

    def get_tutor_subjects(self, tutor_id: str) -> List[TutorSubjectResponse]:
        try:
            result = self.supabase.table("tutor_subjects")\
                .select("*, subject:subjects(name, category)")\
                .eq("tutor_id", tutor_id)\
                .execute()
            return [TutorSubjectResponse(**row) for row in result.data or []]
        except Exception as e:
            logger.error(f"Error loading subjects for tutor {tutor_id}: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to load tutor subjects: {str(e)}")
