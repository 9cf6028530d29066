"""Tests for statistics aggregation."""
import pytest

from quorum.config import Outcome
from quorum.orchestrator import SimulationResult
from quorum.stats import (
    Statistics,
    calculate_statistics,
    outcome_counts,
    round_frequencies,
    statistics_for,
)


def _results(*rounds: int, outcome: Outcome = Outcome.TRAITOR_REMOVED) -> list[SimulationResult]:
    return [SimulationResult(rounds_to_completion=r, outcome=outcome) for r in rounds]


class TestCalculateStatistics:
    def test_mean(self):
        assert calculate_statistics([2, 4, 6, 8, 10]).mean == 6

    def test_median_odd(self):
        assert calculate_statistics([1, 3, 5, 7, 9]).median == 5

    def test_median_even(self):
        assert calculate_statistics([2, 4, 6, 8]).median == 5

    def test_median_uses_sorted_order(self):
        assert calculate_statistics([9, 1, 5]).median == 5

    def test_mode(self):
        assert calculate_statistics([2, 3, 3, 3, 4, 5]).mode == 3

    def test_mode_tie_goes_to_first_seen(self):
        assert calculate_statistics([7, 2, 2, 7, 1]).mode == 7
        assert calculate_statistics([2, 7, 7, 2, 1]).mode == 2

    def test_min_max(self):
        stats = calculate_statistics([3, 1, 4, 1, 5, 9, 2, 6])
        assert stats.min == 1
        assert stats.max == 9

    def test_population_std_dev(self):
        assert calculate_statistics([2, 4, 4, 4, 5, 5, 7, 9]).std_dev == pytest.approx(2.0)

    def test_empty(self):
        stats = calculate_statistics([])
        assert stats == Statistics(mean=0, median=0, mode=0, min=0, max=0, std_dev=0)

    def test_single_value(self):
        stats = calculate_statistics([5])
        assert stats.mean == 5
        assert stats.median == 5
        assert stats.mode == 5
        assert stats.min == 5
        assert stats.max == 5
        assert stats.std_dev == 0

    def test_accepts_generators(self):
        assert calculate_statistics(r for r in [1, 2, 3]).mean == 2

    def test_to_dict(self):
        data = calculate_statistics([1, 3]).to_dict()
        assert data == {"mean": 2.0, "median": 2.0, "mode": 1, "min": 1, "max": 3, "std_dev": 1.0}


class TestSummaries:
    def test_statistics_for_results(self):
        assert statistics_for(_results(2, 4, 6, 8, 10)).mean == 6

    def test_round_frequencies_sorted(self):
        assert round_frequencies([3, 1, 3, 2, 3, 1]) == [(1, 2), (2, 1), (3, 3)]

    def test_round_frequencies_empty(self):
        assert round_frequencies([]) == []

    def test_outcome_counts(self):
        results = _results(1, 2, 3) + _results(4, outcome=Outcome.NO_LOYALISTS)
        assert outcome_counts(results) == {Outcome.TRAITOR_REMOVED: 3, Outcome.NO_LOYALISTS: 1}

    def test_outcome_counts_empty(self):
        assert outcome_counts([]) == {}
