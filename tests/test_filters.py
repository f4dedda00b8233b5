"""Local candidate filter: order-preserving, idempotent, predicates applied as documented."""

import pytest

from tutormatch.modules.discovery.filters import filter_candidates
from tutormatch.modules.discovery.schemas import FilterState


@pytest.fixture
def roster(make_candidate):
    return [
        make_candidate("a", rating=3.0, hourly_rate=25, verified=False, subjects=["Physics"]),
        make_candidate("b", rating=5.0, hourly_rate=60, verified=True, subjects=["Calculus", "Statistics"]),
        make_candidate("c", rating=None, hourly_rate=None, verified=True, subjects=[]),
        make_candidate("d", rating=4.2, hourly_rate=250, verified=True, subjects=["Chemistry"]),
        make_candidate("e", rating=4.9, hourly_rate=30, verified=False, subjects=["calculus"]),
    ]


def ids(candidates):
    return [c.id for c in candidates]


class TestFilterCandidates:

    def test_default_filter_only_drops_over_default_price(self, roster):
        assert ids(filter_candidates(roster, FilterState())) == ["a", "b", "c", "e"]

    def test_verified_only_drops_unverified(self, roster):
        result = filter_candidates(roster, FilterState(verified_only=True, max_price=1000))
        assert ids(result) == ["b", "c", "d"]

    def test_min_rating_treats_missing_rating_as_zero(self, roster):
        result = filter_candidates(roster, FilterState(min_rating=4, max_price=1000))
        assert ids(result) == ["b", "d", "e"]

    def test_missing_hourly_rate_is_never_priced_out(self, roster):
        result = filter_candidates(roster, FilterState(max_price=20))
        assert ids(result) == ["c"]

    def test_subject_filter_is_case_insensitive(self, roster):
        result = filter_candidates(roster, FilterState(subjects=["Calculus"], max_price=1000))
        assert ids(result) == ["b", "e"]

    def test_predicates_combine(self, roster):
        state = FilterState(verified_only=True, min_rating=4, max_price=100)
        assert ids(filter_candidates(roster, state)) == ["b"]

    @pytest.mark.parametrize("state", [
        FilterState(),
        FilterState(verified_only=True),
        FilterState(min_rating=4.5, max_price=50),
        FilterState(subjects=["Physics", "Chemistry"], max_price=500),
    ])
    def test_result_is_ordered_subset_and_idempotent(self, roster, state):
        once = filter_candidates(roster, state)
        positions = [roster.index(c) for c in once]
        assert positions == sorted(positions)
        assert filter_candidates(roster, state) == once
        assert filter_candidates(once, state) == once

    def test_input_list_is_not_mutated(self, roster):
        before = list(roster)
        filter_candidates(roster, FilterState(verified_only=True))
        assert roster == before

    def test_empty_input(self):
        assert filter_candidates([], FilterState(verified_only=True)) == []


class TestFilterState:

    def test_defaults_come_from_settings(self):
        state = FilterState()
        assert state.verified_only is False
        assert state.min_rating == 0
        assert state.max_price == 200
        assert state.subjects == []

    def test_is_immutable(self):
        state = FilterState()
        with pytest.raises(Exception):
            state.min_rating = 4

    def test_rejects_out_of_range_rating(self):
        with pytest.raises(ValueError):
            FilterState(min_rating=6)
