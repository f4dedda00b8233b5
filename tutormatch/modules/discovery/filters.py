from typing import Iterable, List
from tutormatch.modules.profiles.schemas import Candidate
from tutormatch.modules.discovery.schemas import FilterState


def _passes_verification(candidate: Candidate, filters: FilterState) -> bool:
    return candidate.verified or not filters.verified_only


def _passes_rating(candidate: Candidate, filters: FilterState) -> bool:
    if filters.min_rating <= 0:
        return True
    return (candidate.rating or 0) >= filters.min_rating


def _passes_price(candidate: Candidate, filters: FilterState) -> bool:
    # Tutors without a listed rate are never priced out
    if candidate.hourly_rate is None:
        return True
    return candidate.hourly_rate <= filters.max_price


def _passes_subjects(candidate: Candidate, filters: FilterState) -> bool:
    if not filters.subjects:
        return True
    wanted = {s.lower() for s in filters.subjects}
    return any(s.lower() in wanted for s in candidate.subjects)


PREDICATES = (_passes_verification, _passes_rating, _passes_price, _passes_subjects)


def filter_candidates(candidates: Iterable[Candidate], filters: FilterState) -> List[Candidate]:
    """Stable client-side filter: keeps input order, no side effects."""
    return [c for c in candidates if all(predicate(c, filters) for predicate in PREDICATES)]
