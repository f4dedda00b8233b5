from pydantic import BaseModel
from typing import List, Optional
from tutormatch.modules.profiles.schemas import Candidate
from tutormatch.modules.profiles.service import ProfileService
import logging

logger = logging.getLogger(__name__)


class ProviderState(BaseModel):
    candidates: List[Candidate] = []
    loading: bool = False
    error: Optional[str] = None


class CandidateProvider:
    """Fetches tutor candidates once per discovery session. Failures are kept as state, never retried."""

    def __init__(self, profile_service: ProfileService, limit: int = 20):
        self.profile_service = profile_service
        self.limit = limit
        self._state = ProviderState()
        self._loaded = False

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def candidates(self) -> List[Candidate]:
        return self._state.candidates

    def load(self) -> ProviderState:
        if self._loaded:
            return self._state
        return self._fetch()

    def reload(self) -> ProviderState:
        """User-triggered retry."""
        return self._fetch()

    def _fetch(self) -> ProviderState:
        self._state = ProviderState(loading=True)
        try:
            candidates = self.profile_service.list_tutors(limit=self.limit)
            self._state = ProviderState(candidates=candidates)
        except Exception as e:
            error = getattr(e, "detail", None) or str(e)
            logger.error(f"Error loading tutor candidates: {error}")
            self._state = ProviderState(error=error)
        self._loaded = True
        return self._state
