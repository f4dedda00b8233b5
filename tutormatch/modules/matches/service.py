from supabase import Client
from tutormatch.modules.matches.schemas import MatchResponse, MatchWithProfilesResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

MATCH_SELECT = (
    "*, "
    "student:profiles!matches_student_id_fkey(first_name, last_name, avatar_url, university, major), "
    "tutor:profiles!matches_tutor_id_fkey(first_name, last_name, avatar_url, university, major, rating, hourly_rate)"
)


class MatchService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_match(self, student_id: str, tutor_id: str) -> MatchResponse:
        """Record a student's like for a tutor as a pending match"""
        try:
            result = self.supabase.table("matches").insert({
                "student_id": student_id,
                "tutor_id": tutor_id,
                "status": "pending"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create match")

            logger.info(f"Created match {result.data[0]['id']} (student {student_id} -> tutor {tutor_id})")
            return MatchResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_match_by_id(self, match_id: str) -> MatchResponse:
        """Get match by ID"""
        try:
            result = self.supabase.table("matches")\
                .select("*")\
                .eq("id", match_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Match not found")

            return MatchResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_matches(self, user_id: str) -> List[MatchWithProfilesResponse]:
        """List matches where the user is the student or the tutor, newest first"""
        try:
            result = self.supabase.table("matches")\
                .select(MATCH_SELECT)\
                .or_(f"student_id.eq.{user_id},tutor_id.eq.{user_id}")\
                .order("created_at", desc=True)\
                .execute()
            return [MatchWithProfilesResponse(**match) for match in result.data or []]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_match_status(self, match_id: str, status: str) -> MatchResponse:
        """Update match status (pending, matched, rejected)"""
        try:
            result = self.supabase.table("matches")\
                .update({"status": status})\
                .eq("id", match_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Match not found")

            return MatchResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
