from supabase import Client
from tutormatch.modules.profiles.schemas import Candidate, ProfileResponse, ProfileUpdate
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

TUTOR_SELECT = "*, tutor_subjects(proficiency_level, subjects(name, category))"


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_tutors(
        self,
        verified_only: bool = False,
        min_rating: Optional[float] = None,
        max_price: Optional[float] = None,
        limit: int = 20
    ) -> List[Candidate]:
        """List tutor profiles with coarse server-side filters, parsed into Candidates"""
        try:
            query = self.supabase.table("profiles")\
                .select(TUTOR_SELECT)\
                .eq("role", "tutor")
            if verified_only:
                query = query.eq("verified", True)
            if min_rating:
                query = query.gte("rating", min_rating)
            if max_price is not None:
                # Tutors without a listed rate stay visible
                query = query.or_(f"hourly_rate.is.null,hourly_rate.lte.{max_price}")
            result = query.limit(limit).execute()
            candidates = [Candidate.from_row(row) for row in result.data or []]
            logger.debug(f"Fetched {len(candidates)} tutor candidate(s)")
            return candidates
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error listing tutors: {e}")
            raise HTTPException(status_code=502, detail=f"Failed to load tutors: {str(e)}")

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by user ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update the editable fields of a profile"""
        try:
            update_data = profile_data.model_dump(exclude_none=True)
            if not update_data:
                return self.get_profile(user_id)
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
