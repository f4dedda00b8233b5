from fastapi import APIRouter, Depends
from tutormatch.database.supabase_client import get_supabase
from tutormatch.modules.subjects.schemas import SubjectResponse, TutorSubjectResponse
from tutormatch.modules.subjects.service import SubjectService
from tutormatch.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict, List

router = APIRouter(prefix="/subjects", tags=["subjects"])


def get_subject_service(supabase: Client = Depends(get_supabase)) -> SubjectService:
    return SubjectService(supabase)


@router.get("", response_model=List[SubjectResponse])
async def list_subjects(
    current_user: Dict = Depends(get_current_user_id),
    service: SubjectService = Depends(get_subject_service)
):
    """List subjects that can be used in the discovery subject filter"""
    return service.list_subjects()


@router.get("/tutors/{tutor_id}", response_model=List[TutorSubjectResponse])
async def get_tutor_subjects(
    tutor_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: SubjectService = Depends(get_subject_service)
):
    return service.get_tutor_subjects(tutor_id)
