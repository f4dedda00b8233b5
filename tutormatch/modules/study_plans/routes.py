from fastapi import APIRouter, Depends
from tutormatch.database.supabase_client import get_supabase
from tutormatch.modules.study_plans.schemas import StudyPlanCreate, StudyPlanUpdate, StudyPlanResponse
from tutormatch.modules.study_plans.service import StudyPlanService
from tutormatch.core.dependencies import get_current_user_id, require_student, check_participant
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/study-plans", tags=["study-plans"])


def get_study_plan_service(supabase: Client = Depends(get_supabase)) -> StudyPlanService:
    return StudyPlanService(supabase)


@router.get("", response_model=List[StudyPlanResponse])
async def list_study_plans(
    current_user: Dict = Depends(get_current_user_id),
    service: StudyPlanService = Depends(get_study_plan_service)
):
    return service.list_study_plans(current_user["id"])


@router.post("", response_model=StudyPlanResponse, status_code=201)
async def create_study_plan(
    plan_data: StudyPlanCreate,
    current_user: Dict = Depends(require_student),
    service: StudyPlanService = Depends(get_study_plan_service)
):
    """Create a study plan with one of the student's tutors"""
    return service.create_study_plan(plan_data, current_user["id"])


@router.put("/{plan_id}", response_model=StudyPlanResponse)
async def update_study_plan(
    plan_id: str,
    plan_data: StudyPlanUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: StudyPlanService = Depends(get_study_plan_service)
):
    plan = service.get_study_plan(plan_id)
    check_participant(current_user["id"], plan.model_dump(), "Study plan")
    return service.update_study_plan(plan_id, plan_data)


@router.post("/{plan_id}/progress", response_model=StudyPlanResponse)
async def advance_progress(
    plan_id: str,
    current_user: Dict = Depends(get_current_user_id),
    service: StudyPlanService = Depends(get_study_plan_service)
):
    """Record another step of progress on the plan"""
    plan = service.get_study_plan(plan_id)
    check_participant(current_user["id"], plan.model_dump(), "Study plan")
    return service.advance_progress(plan_id)
