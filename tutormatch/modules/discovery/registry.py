"""Thread-safe registry of user_id -> open DiscoverySession."""
import threading
import logging
from typing import Dict
from tutormatch.modules.discovery.session import DiscoverySession
from tutormatch.modules.discovery.exceptions import SessionNotFoundError

logger = logging.getLogger(__name__)


class DiscoveryRegistry:
    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[str, DiscoverySession] = {}

    def register(self, session: DiscoverySession) -> None:
        """Open a session for its user, closing any previous one."""
        with self._lock:
            previous = self._sessions.get(session.user_id)
            self._sessions[session.user_id] = session
        if previous is not None and previous is not session:
            previous.close()
        logger.debug(f"Registered discovery session for {session.user_id}")

    def get(self, user_id: str) -> DiscoverySession:
        with self._lock:
            session = self._sessions.get(user_id)
        if session is None:
            raise SessionNotFoundError(user_id)
        return session

    def close(self, user_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(user_id, None)
        if session is None:
            return False
        session.close()
        return True

    def close_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.close()
        if sessions:
            logger.info(f"Closed {len(sessions)} discovery session(s)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


registry = DiscoveryRegistry()
