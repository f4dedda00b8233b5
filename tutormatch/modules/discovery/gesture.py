"""
Drag gesture -> card transform, and release -> commit or spring back.

Phases: idle -> dragging -> committing | resetting -> idle.
While committing or resetting the card is animating and new input is
refused until the client reports the animation finished.
"""

from typing import Optional
from tutormatch.modules.discovery.schemas import (
    SwipeConfig, SwipeDirection, GestureState, GestureOutcome, Animation
)
from tutormatch.modules.discovery.exceptions import GestureBusyError, NoActiveGestureError
import logging

logger = logging.getLogger(__name__)

IDLE = "idle"
DRAGGING = "dragging"
COMMITTING = "committing"
RESETTING = "resetting"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class GestureDriver:
    def __init__(self, container_width: float, config: Optional[SwipeConfig] = None):
        if container_width <= 0:
            raise ValueError("container_width must be positive")
        self.container_width = container_width
        self.config = config or SwipeConfig()
        self.phase = IDLE
        self._pending_direction: Optional[SwipeDirection] = None
        self._reset_values()

    def _reset_values(self) -> None:
        self.translate_x = 0.0
        self.translate_y = 0.0
        self.rotation = 0.0
        self.opacity = 1.0

    @property
    def threshold(self) -> float:
        return self.container_width * self.config.threshold_ratio

    @property
    def is_busy(self) -> bool:
        return self.phase in (COMMITTING, RESETTING)

    def snapshot(self) -> GestureState:
        return GestureState(
            phase=self.phase,
            translate_x=self.translate_x,
            translate_y=self.translate_y,
            rotation=self.rotation,
            opacity=self.opacity,
        )

    def begin(self) -> GestureState:
        if self.is_busy:
            raise GestureBusyError(self.phase)
        self.phase = DRAGGING
        return self.snapshot()

    def drag(self, dx: float, dy: float = 0) -> GestureState:
        """Apply the cumulative drag delta since the gesture began."""
        if self.phase == IDLE:
            self.begin()
        elif self.is_busy:
            raise GestureBusyError(self.phase)
        cfg = self.config
        self.translate_x = float(dx)
        self.translate_y = float(dy)
        self.rotation = _clamp(dx * cfg.rotation_factor, -cfg.max_rotation_deg, cfg.max_rotation_deg)
        progress = min(abs(dx) / (self.container_width * cfg.opacity_fade_ratio), 1.0)
        self.opacity = 1.0 - (1.0 - cfg.min_opacity) * progress
        return self.snapshot()

    def release(self) -> GestureOutcome:
        if self.phase != DRAGGING:
            if self.is_busy:
                raise GestureBusyError(self.phase)
            raise NoActiveGestureError(self.phase)
        if abs(self.translate_x) > self.threshold:
            direction = "right" if self.translate_x > 0 else "left"
            return self._start_exit(direction)
        self.phase = RESETTING
        logger.debug(f"Drag of {self.translate_x:.1f}px below threshold {self.threshold:.1f}px, springing back")
        return GestureOutcome(
            committed=False,
            animation=Animation(translate_x=0, translate_y=0, rotation=0, opacity=1, easing="spring"),
        )

    def fling(self, direction: SwipeDirection) -> GestureOutcome:
        """Button-triggered like/reject; takes the same exit path as a committed drag."""
        if self.is_busy:
            raise GestureBusyError(self.phase)
        return self._start_exit(direction)

    def _start_exit(self, direction: SwipeDirection) -> GestureOutcome:
        self.phase = COMMITTING
        self._pending_direction = direction
        sign = 1 if direction == "right" else -1
        return GestureOutcome(
            committed=True,
            direction=direction,
            animation=Animation(
                translate_x=sign * self.container_width,
                translate_y=self.translate_y,
                rotation=self.rotation,
                opacity=0,
                duration_ms=self.config.exit_duration_ms,
                easing="timing",
            ),
        )

    def finish(self) -> Optional[SwipeDirection]:
        """Exit or reset animation completed: back to neutral. Returns the committed direction, if any."""
        if not self.is_busy:
            raise NoActiveGestureError(self.phase)
        direction = self._pending_direction if self.phase == COMMITTING else None
        self._pending_direction = None
        self._reset_values()
        self.phase = IDLE
        return direction

    def cancel(self) -> None:
        """Drop any gesture in progress without committing."""
        self._pending_direction = None
        self._reset_values()
        self.phase = IDLE
