from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime, timezone
from tutormatch.config import settings
from tutormatch.modules.profiles.schemas import Candidate

SwipeDirection = Literal["left", "right"]
GesturePhase = Literal["idle", "dragging", "committing", "resetting"]
ViewStatus = Literal["loading", "error", "empty", "showing"]
EmptyReason = Literal["no_candidates", "no_filter_matches"]


class FilterState(BaseModel):
    verified_only: bool = False
    min_rating: float = Field(0, ge=0, le=5)
    max_price: float = Field(default_factory=lambda: settings.default_max_price, ge=0)
    subjects: List[str] = []

    class Config:
        frozen = True


class SwipeConfig(BaseModel):
    threshold_ratio: float = 0.25
    exit_duration_ms: int = 250
    rotation_factor: float = 0.05
    max_rotation_deg: float = 15
    min_opacity: float = 0.8
    opacity_fade_ratio: float = 0.4

    @classmethod
    def from_settings(cls) -> "SwipeConfig":
        return cls(
            threshold_ratio=settings.swipe_threshold_ratio,
            exit_duration_ms=settings.swipe_exit_duration_ms,
            rotation_factor=settings.rotation_factor,
            max_rotation_deg=settings.max_rotation_deg,
            min_opacity=settings.min_drag_opacity,
            opacity_fade_ratio=settings.opacity_fade_ratio,
        )


class GestureState(BaseModel):
    phase: GesturePhase = "idle"
    translate_x: float = 0
    translate_y: float = 0
    rotation: float = 0
    opacity: float = 1


class Animation(BaseModel):
    """Target transform the client animates the top card to."""
    translate_x: float
    translate_y: float
    rotation: float
    opacity: float
    duration_ms: Optional[int] = None
    easing: Literal["timing", "spring"]


class GestureOutcome(BaseModel):
    committed: bool
    direction: Optional[SwipeDirection] = None
    animation: Animation


class Notice(BaseModel):
    kind: Literal["match", "error"]
    message: str
    tutor_id: str
    match_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DiscoveryView(BaseModel):
    status: ViewStatus
    error: Optional[str] = None
    empty_reason: Optional[EmptyReason] = None
    current: Optional[Candidate] = None
    next: Optional[Candidate] = None
    index: int = 0
    total: int = 0
    available: int = 0
    filters: FilterState
    gesture: Optional[GestureState] = None
    notices: List[Notice] = []


class SessionStart(BaseModel):
    container_width: Optional[float] = Field(None, gt=0)


class DragRequest(BaseModel):
    dx: float
    dy: float = 0


class SwipeRequest(BaseModel):
    direction: SwipeDirection
