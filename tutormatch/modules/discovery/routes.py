from concurrent.futures import ThreadPoolExecutor
from fastapi import APIRouter, Depends, Query
from tutormatch.config import settings
from tutormatch.database.supabase_client import get_supabase, SupabaseClient
from tutormatch.modules.profiles.schemas import Candidate
from tutormatch.modules.profiles.service import ProfileService
from tutormatch.modules.matches.service import MatchService
from tutormatch.modules.discovery.schemas import (
    FilterState, SwipeConfig, DiscoveryView, GestureState, GestureOutcome,
    SessionStart, DragRequest, SwipeRequest
)
from tutormatch.modules.discovery.filters import filter_candidates
from tutormatch.modules.discovery.provider import CandidateProvider
from tutormatch.modules.discovery.recorder import MatchRecorder
from tutormatch.modules.discovery.session import DiscoverySession
from tutormatch.modules.discovery.registry import DiscoveryRegistry, registry
from tutormatch.core.dependencies import require_student
from supabase import Client
from typing import List, Dict, Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/discovery", tags=["discovery"])

_match_executor: Optional[ThreadPoolExecutor] = None


def get_match_executor() -> ThreadPoolExecutor:
    global _match_executor
    if _match_executor is None:
        _match_executor = ThreadPoolExecutor(
            max_workers=settings.match_workers, thread_name_prefix="match-recorder"
        )
    return _match_executor


def shutdown_match_executor() -> None:
    global _match_executor
    if _match_executor is not None:
        _match_executor.shutdown(wait=False)
        _match_executor = None


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


def get_worker_match_service() -> MatchService:
    """Match writes run on worker threads outside the request; use the service-role client."""
    return MatchService(SupabaseClient.get_service_client())


def get_registry() -> DiscoveryRegistry:
    return registry


@router.get("/tutors", response_model=List[Candidate])
async def list_tutors(
    verified_only: bool = False,
    min_rating: float = Query(0, ge=0, le=5),
    max_price: Optional[float] = Query(None, ge=0),
    subjects: List[str] = Query(default=[]),
    user_data: Dict = Depends(require_student),
    service: ProfileService = Depends(get_profile_service)
):
    """One-shot filtered tutor list, without a swipe session"""
    filters = FilterState(
        verified_only=verified_only,
        min_rating=min_rating,
        max_price=max_price if max_price is not None else settings.default_max_price,
        subjects=subjects,
    )
    candidates = service.list_tutors(
        verified_only=filters.verified_only,
        min_rating=filters.min_rating,
        max_price=filters.max_price,
        limit=settings.tutor_fetch_limit,
    )
    # Subjects live in a nested relation, so that predicate runs locally
    return filter_candidates(candidates, filters)


@router.post("/session", response_model=DiscoveryView, status_code=201)
async def start_session(
    start_data: Optional[SessionStart] = None,
    user_data: Dict = Depends(require_student),
    profile_service: ProfileService = Depends(get_profile_service),
    match_service: MatchService = Depends(get_worker_match_service),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    """Open the swipe screen: load candidates and show the first card"""
    container_width = (start_data and start_data.container_width) or settings.default_container_width
    session = DiscoverySession(
        user_id=user_data["id"],
        provider=CandidateProvider(profile_service, limit=settings.tutor_fetch_limit),
        recorder=MatchRecorder(match_service, user_data["id"], get_match_executor()),
        container_width=container_width,
        swipe_config=SwipeConfig.from_settings(),
    )
    sessions.register(session)
    return session.start()


@router.get("/session", response_model=DiscoveryView)
async def get_session(
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    return sessions.get(user_data["id"]).view()


@router.delete("/session", status_code=204)
async def close_session(
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    """Leave the swipe screen; pending match results are discarded"""
    sessions.close(user_data["id"])
    return None


@router.put("/session/filters", response_model=DiscoveryView)
async def apply_filters(
    filters: FilterState,
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    return sessions.get(user_data["id"]).apply_filters(filters)


@router.delete("/session/filters", response_model=DiscoveryView)
async def reset_filters(
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    return sessions.get(user_data["id"]).reset_filters()


@router.post("/session/refresh", response_model=DiscoveryView)
async def refresh(
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    """Reload candidates (the retry action of the error state)"""
    return sessions.get(user_data["id"]).refresh()


@router.post("/session/drag", response_model=GestureState)
async def drag(
    drag_data: DragRequest,
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    return sessions.get(user_data["id"]).drag(drag_data.dx, drag_data.dy)


@router.post("/session/release", response_model=GestureOutcome)
async def release(
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    return sessions.get(user_data["id"]).release()


@router.post("/session/swipe", response_model=GestureOutcome)
async def swipe(
    swipe_data: SwipeRequest,
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    """Like/reject button: same exit animation as a committed drag"""
    return sessions.get(user_data["id"]).swipe(swipe_data.direction)


@router.post("/session/complete", response_model=DiscoveryView)
async def complete_animation(
    user_data: Dict = Depends(require_student),
    sessions: DiscoveryRegistry = Depends(get_registry)
):
    """Client finished the exit or spring-back animation"""
    return sessions.get(user_data["id"]).complete_animation()
