from typing import Callable, List, Optional, Any
from tutormatch.modules.profiles.schemas import Candidate
from tutormatch.modules.discovery.schemas import SwipeDirection
import logging

logger = logging.getLogger(__name__)

IDLE = "idle"
SHOWING = "showing"


class CardStack:
    """
    Position in the filtered candidate list.

    Browsing is cyclic: committing the last card wraps back to index 0,
    so the stack is either idle (empty list) or showing a card.
    """

    def __init__(self, on_like: Optional[Callable[[str], Any]] = None):
        self.on_like = on_like
        self._candidates: List[Candidate] = []
        self.index = 0

    def __len__(self) -> int:
        return len(self._candidates)

    @property
    def status(self) -> str:
        return SHOWING if self._candidates else IDLE

    @property
    def candidates(self) -> List[Candidate]:
        return list(self._candidates)

    @property
    def current(self) -> Optional[Candidate]:
        if not self._candidates:
            return None
        return self._candidates[self.index]

    @property
    def next(self) -> Optional[Candidate]:
        """Card underneath the top one; None unless at least two candidates."""
        if len(self._candidates) < 2:
            return None
        return self._candidates[(self.index + 1) % len(self._candidates)]

    def set_candidates(self, candidates: List[Candidate]) -> None:
        self._candidates = list(candidates)
        self.index = 0

    def commit(self, direction: SwipeDirection) -> Optional[Candidate]:
        """Advance past the top card; a right swipe also records a like for it."""
        candidate = self.current
        if candidate is None:
            return None
        self.index = (self.index + 1) % len(self._candidates)
        if direction == "right" and self.on_like is not None:
            try:
                self.on_like(candidate.id)
            except Exception as e:
                # Likes are fire-and-forget; browsing continues regardless
                logger.error(f"Failed to dispatch like for {candidate.id}: {e}")
        return candidate
