"""
Game orchestrator. Drives rounds until the end rule fires and assembles
the round history into a GameResult.

Two game variants share the same engine:
  - "random": configurable loyalist strategy (random / fixate), either end condition
  - "influence": influence-based votes and phase-two victim, faction elimination only
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from quorum.config import (
    EndCondition,
    Outcome,
    SimulationConfig,
    SimulationType,
    VotingStrategy,
)
from quorum.resolver import RoundResult, resolve_round
from quorum.roster import Roster
from quorum.rules import EndRule
from quorum.strategies import InfluenceMatrix, build_strategies

logger = logging.getLogger("quorum.orchestrator")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SimulationResult:
    """Per-game summary kept for batch runs."""
    rounds_to_completion: int
    outcome: Outcome


@dataclass(frozen=True)
class GameResult:
    rounds: list[RoundResult]
    total_rounds: int
    outcome: Outcome
    end_condition: EndCondition

    def summary(self) -> SimulationResult:
        return SimulationResult(rounds_to_completion=self.total_rounds, outcome=self.outcome)

    def to_dict(self) -> dict:
        return {
            "rounds": [r.to_dict() for r in self.rounds],
            "total_rounds": self.total_rounds,
            "outcome": self.outcome.value,
            "end_condition": self.end_condition.value,
        }


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------

class VotingGame:
    """Holds all state for a single game. Run it once."""

    def __init__(
        self,
        loyalist_count: int,
        traitor_count: int,
        end_condition: EndCondition = EndCondition.FIRST_TRAITOR_REMOVED,
        voting_strategy: VotingStrategy = VotingStrategy.RANDOM,
        simulation_type: SimulationType = SimulationType.RANDOM,
        rng: random.Random | None = None,
    ) -> None:
        self.end_condition = EndCondition(end_condition)
        self.voting_strategy = VotingStrategy(voting_strategy)
        self.simulation_type = SimulationType(simulation_type)
        self.rng = rng if rng is not None else random.Random()

        self.roster = Roster(loyalist_count, traitor_count)
        self.influence: InfluenceMatrix | None = None
        if self.simulation_type == SimulationType.INFLUENCE:
            self.influence = InfluenceMatrix([a.id for a in self.roster], self.rng)

        self.strategies = build_strategies(self.voting_strategy, self.simulation_type, self.influence)
        self.rule = EndRule.for_game(self.end_condition, self.simulation_type)

        self.round_num: int = 0
        self.history: list[RoundResult] = []
        self.finished: bool = False

    @classmethod
    def from_config(cls, config: SimulationConfig, rng: random.Random | None = None) -> VotingGame:
        return cls(
            loyalist_count=config.loyalists,
            traitor_count=config.traitors,
            end_condition=config.end_condition,
            voting_strategy=config.voting_strategy,
            simulation_type=config.simulation_type,
            rng=rng,
        )

    def run_round(self) -> RoundResult:
        """Execute one round and append it to the history."""
        self.round_num += 1
        result, self.finished = resolve_round(
            self.roster,
            self.strategies,
            self.rule,
            self.rng,
            self.round_num,
            self.influence,
        )
        self.history.append(result)
        return result

    def run(self, verbose: bool = False) -> GameResult:
        """Play rounds until the end rule fires."""
        if self.finished or self.history:
            raise RuntimeError("game already played; create a new VotingGame")

        if verbose:
            print(
                f"=== QUORUM: {self.roster.loyalist_count} loyalists vs "
                f"{self.roster.traitor_count} traitors, {self.rule.end_condition.value} ==="
            )

        # Every round removes at least one actor, so this terminates.
        while not self.finished:
            result = self.run_round()
            if verbose:
                _print_round(self, result)

        game = GameResult(
            rounds=list(self.history),
            total_rounds=self.round_num,
            outcome=self.rule.outcome(self.roster),
            end_condition=self.rule.end_condition,
        )
        logger.debug("Game over after %d rounds: %s", game.total_rounds, game.outcome.value)

        if verbose:
            _print_summary(self, game)

        return game


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def _label(game: VotingGame, actor_id: int) -> str:
    actor = game.roster.get(actor_id)
    return f"#{actor_id} ({actor.faction.value})"


def _print_round(game: VotingGame, result: RoundResult) -> None:
    loyalists = sum(1 for a in result.remaining_actors if a.is_loyalist)
    traitors = len(result.remaining_actors) - loyalists
    print(f"\n--- Round {result.round_number} | Loyalists: {loyalists} | Traitors: {traitors} ---")

    tally = ", ".join(
        f"#{aid}: {count}"
        for aid, count in sorted(result.phase_one_votes.items(), key=lambda kv: -kv[1])
    )
    print(f"  VOTES: {tally or 'none'}")
    if result.tie_break_attempts:
        print(f"  TIE-BREAKS: {result.tie_break_attempts}")
    print(f"  VOTED OUT: {_label(game, result.phase_one_removed)}")
    if result.phase_two_removed is not None:
        print(f"  REMOVED: {_label(game, result.phase_two_removed)}")


def _print_summary(game: VotingGame, result: GameResult) -> None:
    print(f"\n{'='*50}")
    print(f"GAME OVER after {result.total_rounds} rounds")
    print(f"OUTCOME: {result.outcome.value}")
    survivors = game.roster.active_actors()
    print(f"Survivors ({len(survivors)}): " + ", ".join(_label(game, a.id) for a in survivors))
    print(f"{'='*50}")
