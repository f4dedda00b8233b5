from typing import Optional
from tutormatch.modules.discovery.schemas import (
    FilterState, SwipeConfig, SwipeDirection, DiscoveryView, GestureState, GestureOutcome
)
from tutormatch.modules.discovery.filters import filter_candidates
from tutormatch.modules.discovery.card_stack import CardStack
from tutormatch.modules.discovery.gesture import GestureDriver
from tutormatch.modules.discovery.provider import CandidateProvider
from tutormatch.modules.discovery.recorder import MatchRecorder
from tutormatch.modules.discovery.exceptions import NoCandidateError
import logging

logger = logging.getLogger(__name__)


class DiscoverySession:
    """
    One student's swipe screen: candidates -> filter -> card stack -> gesture.

    A committed right swipe hands the top candidate to the match recorder
    and the stack advances immediately, whatever the backend answers.
    """

    def __init__(
        self,
        user_id: str,
        provider: CandidateProvider,
        recorder: MatchRecorder,
        container_width: float,
        swipe_config: Optional[SwipeConfig] = None
    ):
        self.user_id = user_id
        self.provider = provider
        self.recorder = recorder
        self.filters = FilterState()
        self.stack = CardStack(on_like=recorder.record)
        self.gesture = GestureDriver(container_width, swipe_config)
        self.closed = False

    def start(self) -> DiscoveryView:
        self.provider.load()
        self._sync_stack()
        return self.view()

    def refresh(self) -> DiscoveryView:
        self.provider.reload()
        self._sync_stack()
        return self.view()

    def apply_filters(self, filters: FilterState) -> DiscoveryView:
        self.filters = filters
        self._sync_stack()
        return self.view()

    def reset_filters(self) -> DiscoveryView:
        return self.apply_filters(FilterState())

    def _sync_stack(self) -> None:
        filtered = filter_candidates(self.provider.candidates, self.filters)
        self.stack.set_candidates(filtered)
        self.gesture.cancel()
        logger.debug(f"Discovery for {self.user_id}: {len(filtered)}/{len(self.provider.candidates)} candidates after filters")

    def _require_card(self) -> GestureDriver:
        # No gesture handling without a card on top
        if self.stack.current is None:
            raise NoCandidateError()
        return self.gesture

    def drag(self, dx: float, dy: float = 0) -> GestureState:
        return self._require_card().drag(dx, dy)

    def release(self) -> GestureOutcome:
        return self._require_card().release()

    def swipe(self, direction: SwipeDirection) -> GestureOutcome:
        return self._require_card().fling(direction)

    def complete_animation(self) -> DiscoveryView:
        direction = self._require_card().finish()
        if direction is not None:
            candidate = self.stack.commit(direction)
            logger.info(f"User {self.user_id} swiped {direction} on tutor {candidate.id}")
        return self.view()

    def view(self) -> DiscoveryView:
        state = self.provider.state
        view = DiscoveryView(
            status="showing",
            filters=self.filters,
            total=len(self.stack),
            available=len(state.candidates),
            notices=self.recorder.drain_notices(),
        )
        if state.loading:
            view.status = "loading"
        elif state.error:
            view.status = "error"
            view.error = state.error
        elif self.stack.current is None:
            view.status = "empty"
            view.empty_reason = "no_candidates" if not state.candidates else "no_filter_matches"
        else:
            view.current = self.stack.current
            view.next = self.stack.next
            view.index = self.stack.index
            view.gesture = self.gesture.snapshot()
        return view

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.gesture.cancel()
        self.recorder.cancel()
        logger.debug(f"Closed discovery session for {self.user_id}")
