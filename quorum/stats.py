"""
Descriptive statistics over batches of game summaries.
"""
from __future__ import annotations

import statistics
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass

from quorum.config import Outcome
from quorum.orchestrator import SimulationResult


@dataclass(frozen=True)
class Statistics:
    mean: float = 0.0
    median: float = 0.0
    mode: int = 0
    min: int = 0
    max: int = 0
    std_dev: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_statistics(values: Iterable[int]) -> Statistics:
    """
    Mean, median, mode, min, max and population std-dev of rounds-to-completion.
    Mode ties go to the value seen first. An empty batch gives all zeros.
    """
    rounds = list(values)
    if not rounds:
        return Statistics()

    return Statistics(
        mean=statistics.fmean(rounds),
        median=float(statistics.median(rounds)),
        mode=statistics.mode(rounds),
        min=min(rounds),
        max=max(rounds),
        std_dev=statistics.pstdev(rounds),
    )


def statistics_for(results: Sequence[SimulationResult]) -> Statistics:
    return calculate_statistics(r.rounds_to_completion for r in results)


def round_frequencies(values: Iterable[int]) -> list[tuple[int, int]]:
    """(rounds, games) pairs sorted by rounds. Histogram input."""
    return sorted(Counter(values).items())


def outcome_counts(results: Sequence[SimulationResult]) -> dict[Outcome, int]:
    """Games per outcome. Outcomes that never happened are omitted."""
    counts: dict[Outcome, int] = {}
    for r in results:
        counts[r.outcome] = counts.get(r.outcome, 0) + 1
    return counts
