from supabase import Client
from tutormatch.modules.study_plans.schemas import StudyPlanCreate, StudyPlanUpdate, StudyPlanResponse
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

PLAN_SELECT = (
    "*, "
    "student:profiles!study_plans_student_id_fkey(first_name, last_name), "
    "tutor:profiles!study_plans_tutor_id_fkey(first_name, last_name)"
)
PROGRESS_STEP = 10


class StudyPlanService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_study_plans(self, user_id: str) -> List[StudyPlanResponse]:
        """List plans where the user is the student or the tutor, newest first"""
        try:
            result = self.supabase.table("study_plans")\
                .select(PLAN_SELECT)\
                .or_(f"student_id.eq.{user_id},tutor_id.eq.{user_id}")\
                .order("created_at", desc=True)\
                .execute()
            return [StudyPlanResponse(**plan) for plan in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=502, detail=f"Failed to load study plans: {str(e)}")

    def get_study_plan(self, plan_id: str) -> StudyPlanResponse:
        try:
            result = self.supabase.table("study_plans")\
                .select("*")\
                .eq("id", plan_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Study plan not found")

            return StudyPlanResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_study_plan(self, plan_data: StudyPlanCreate, student_id: str) -> StudyPlanResponse:
        """Create a study plan between the student and a tutor"""
        try:
            result = self.supabase.table("study_plans").insert({
                "student_id": student_id,
                "tutor_id": plan_data.tutor_id,
                "title": plan_data.title,
                "subject": plan_data.subject,
                "description": plan_data.description,
                "goals": [goal.model_dump() for goal in plan_data.goals],
                "due_date": plan_data.due_date.isoformat() if plan_data.due_date else None,
                "progress": 0,
                "status": "active"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create study plan")

            return StudyPlanResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_study_plan(self, plan_id: str, plan_data: StudyPlanUpdate) -> StudyPlanResponse:
        try:
            update_data = plan_data.model_dump(exclude_none=True, mode="json")
            if not update_data:
                return self.get_study_plan(plan_id)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("study_plans")\
                .update(update_data)\
                .eq("id", plan_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Study plan not found")

            return StudyPlanResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def advance_progress(self, plan_id: str, step: int = PROGRESS_STEP) -> StudyPlanResponse:
        """Bump progress by step, capped at 100"""
        plan = self.get_study_plan(plan_id)
        new_progress = min(plan.progress + step, 100)
        return self.update_study_plan(plan_id, StudyPlanUpdate(progress=new_progress))
