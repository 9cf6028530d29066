"""
Monte Carlo runner. Plays many independent games and summarizes them.

Every game gets its own random.Random seeded from the batch RNG, so games
share no mutable state and a seeded batch is reproducible.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from quorum.config import (
    EndCondition,
    Outcome,
    SimulationConfig,
    SimulationType,
    VotingStrategy,
)
from quorum.orchestrator import GameResult, SimulationResult, VotingGame
from quorum.stats import Statistics, outcome_counts, round_frequencies, statistics_for

logger = logging.getLogger("quorum.montecarlo")

ProgressCallback = Callable[[int, int], None]


def _game_rng(batch_rng: random.Random) -> random.Random:
    return random.Random(batch_rng.getrandbits(64))


def run_batch(
    iterations: int,
    loyalist_count: int,
    traitor_count: int,
    end_condition: EndCondition = EndCondition.FIRST_TRAITOR_REMOVED,
    voting_strategy: VotingStrategy = VotingStrategy.RANDOM,
    simulation_type: SimulationType = SimulationType.RANDOM,
    rng: random.Random | None = None,
) -> list[SimulationResult]:
    """Play `iterations` fresh games. Results are in play order."""
    if iterations < 1:
        raise ValueError(f"must run at least 1 iteration, got {iterations}")
    if loyalist_count < 1 or traitor_count < 1:
        raise ValueError(
            f"need at least 1 loyalist and 1 traitor, got {loyalist_count} and {traitor_count}"
        )
    if rng is None:
        rng = random.Random()

    results: list[SimulationResult] = []
    for _ in range(iterations):
        game = VotingGame(
            loyalist_count,
            traitor_count,
            end_condition=end_condition,
            voting_strategy=voting_strategy,
            simulation_type=simulation_type,
            rng=_game_rng(rng),
        )
        results.append(game.run().summary())
    return results


# ---------------------------------------------------------------------------
# Chunked simulation with report
# ---------------------------------------------------------------------------

@dataclass
class SimulationReport:
    config: SimulationConfig
    results: list[SimulationResult] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)
    outcomes: dict[Outcome, int] = field(default_factory=dict)
    frequencies: list[tuple[int, int]] = field(default_factory=list)
    sample_game: GameResult | None = None

    def to_dict(self) -> dict:
        return {
            "config": self.config.model_dump(mode="json"),
            "games": len(self.results),
            "statistics": self.statistics.to_dict(),
            "outcomes": {o.value: n for o, n in self.outcomes.items()},
            "frequencies": [list(pair) for pair in self.frequencies],
            "sample_game": self.sample_game.to_dict() if self.sample_game else None,
        }


def run_simulation(
    config: SimulationConfig,
    progress: ProgressCallback | None = None,
) -> SimulationReport:
    """
    Run config.iterations games in chunks of config.batch_size, reporting
    progress(done, total) after each chunk, then play one sample game
    with the same parameters for inspection.
    """
    rng = random.Random(config.seed)
    total = config.iterations
    results: list[SimulationResult] = []

    logger.info(
        "Simulating %d games: %d loyalists, %d traitors, %s/%s/%s",
        total, config.loyalists, config.traitors,
        config.simulation_type.value, config.voting_strategy.value, config.end_condition.value,
    )

    while len(results) < total:
        chunk = min(config.batch_size, total - len(results))
        results.extend(run_batch(
            chunk,
            config.loyalists,
            config.traitors,
            end_condition=config.end_condition,
            voting_strategy=config.voting_strategy,
            simulation_type=config.simulation_type,
            rng=rng,
        ))
        if progress is not None:
            progress(len(results), total)

    sample = VotingGame.from_config(config, rng=_game_rng(rng)).run()

    report = SimulationReport(
        config=config,
        results=results,
        statistics=statistics_for(results),
        outcomes=outcome_counts(results),
        frequencies=round_frequencies(r.rounds_to_completion for r in results),
        sample_game=sample,
    )
    logger.info(
        "Completed %d games: mean %.2f rounds, outcomes %s",
        len(results), report.statistics.mean,
        {o.value: n for o, n in report.outcomes.items()},
    )
    return report
