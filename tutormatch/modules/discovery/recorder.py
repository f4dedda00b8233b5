import threading
from concurrent.futures import Executor, Future
from typing import List, Optional
from tutormatch.modules.matches.schemas import MatchResponse
from tutormatch.modules.matches.service import MatchService
from tutormatch.modules.discovery.schemas import Notice
import logging

logger = logging.getLogger(__name__)


class MatchRecorder:
    """
    Creates a pending match for every like, off the request path.

    The card stack never waits on it: success queues a match notice,
    failure queues an error notice, and neither touches the stack.
    Once the cancel event is set (the discovery session closed), new
    likes are refused and results of in-flight ones are dropped.
    """

    def __init__(
        self,
        match_service: MatchService,
        student_id: str,
        executor: Executor,
        cancel_event: Optional[threading.Event] = None
    ):
        self.match_service = match_service
        self.student_id = student_id
        self.executor = executor
        self.cancel_event = cancel_event or threading.Event()
        self._lock = threading.Lock()
        self._notices: List[Notice] = []

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def record(self, tutor_id: str) -> Optional[Future]:
        if self.cancelled:
            logger.debug(f"Discovery session closed; not recording like for {tutor_id}")
            return None
        return self.executor.submit(self._create_match, tutor_id)

    def _create_match(self, tutor_id: str) -> Optional[MatchResponse]:
        try:
            match = self.match_service.create_match(self.student_id, tutor_id)
        except Exception as e:
            detail = getattr(e, "detail", None) or str(e)
            logger.warning(f"Match creation failed (student {self.student_id} -> tutor {tutor_id}): {detail}")
            self._push(Notice(
                kind="error",
                message="Failed to create match. Please try again.",
                tutor_id=tutor_id,
            ))
            return None
        self._push(Notice(kind="match", message="It's a match!", tutor_id=tutor_id, match_id=match.id))
        return match

    def _push(self, notice: Notice) -> None:
        with self._lock:
            # cancel() clears under the same lock
            if self.cancelled:
                return
            self._notices.append(notice)

    def drain_notices(self) -> List[Notice]:
        with self._lock:
            notices, self._notices = self._notices, []
        return notices

    def cancel(self) -> None:
        self.cancel_event.set()
        with self._lock:
            self._notices.clear()
