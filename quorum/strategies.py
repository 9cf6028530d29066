"""
Vote target selection. One capability, several strategies:

  random     -- uniform over the voter's candidates
  fixation   -- loyalists stick with one suspect until that suspect is gone
  influence  -- vote for the candidate the voter has the least influence over

Candidates depend on faction: loyalists may vote for any other active actor,
traitors only for active loyalists. Strategies never mutate the roster.
"""
from __future__ import annotations

import random
from typing import Protocol, Sequence

from quorum.actor import Actor
from quorum.config import Faction, SimulationType, VotingStrategy
from quorum.roster import Roster

MIN_INFLUENCE_SCORE = 1
MAX_INFLUENCE_SCORE = 100


# ---------------------------------------------------------------------------
# Strategy protocol
# ---------------------------------------------------------------------------

class VoteStrategy(Protocol):
    def choose_target(
        self, actor: Actor, roster: Roster, rng: random.Random
    ) -> int | None: ...


def candidate_targets(actor: Actor, roster: Roster) -> list[Actor]:
    """Actors this voter may vote for in a normal (unrestricted) vote."""
    if actor.is_traitor:
        return roster.active_loyalists()
    return [a for a in roster.active_actors() if a.id != actor.id]


def random_tie_break_vote(eligible: Sequence[Actor], rng: random.Random) -> int | None:
    """Tie-break re-votes ignore strategy: uniform over the tied set, self included."""
    if not eligible:
        return None
    return rng.choice(eligible).id


# ---------------------------------------------------------------------------
# Random
# ---------------------------------------------------------------------------

class RandomStrategy:
    """Uniform choice among candidates. Also the fixed traitor strategy."""

    def choose_target(self, actor: Actor, roster: Roster, rng: random.Random) -> int | None:
        targets = candidate_targets(actor, roster)
        if not targets:
            return None
        return rng.choice(targets).id


# ---------------------------------------------------------------------------
# Suspect fixation
# ---------------------------------------------------------------------------

class FixationStrategy:
    """
    Each voter remembers one suspect and votes for them every round while
    they remain a valid candidate, then picks a fresh random suspect.
    One instance per game; memory is never shared between games.
    """

    def __init__(self) -> None:
        self.suspects: dict[int, int] = {}  # voter id -> suspect id

    def choose_target(self, actor: Actor, roster: Roster, rng: random.Random) -> int | None:
        targets = candidate_targets(actor, roster)
        if not targets:
            return None

        suspect = self.suspects.get(actor.id)
        if suspect is not None and any(t.id == suspect for t in targets):
            return suspect

        suspect = rng.choice(targets).id
        self.suspects[actor.id] = suspect
        return suspect


# ---------------------------------------------------------------------------
# Influence
# ---------------------------------------------------------------------------

class InfluenceMatrix:
    """
    Fixed directed influence scores for every ordered pair of distinct actors.
    Generated once at game start, never changed.
    """

    def __init__(self, actor_ids: Sequence[int], rng: random.Random) -> None:
        self._scores: dict[tuple[int, int], int] = {}
        for source in actor_ids:
            for target in actor_ids:
                if source != target:
                    self._scores[(source, target)] = rng.randint(
                        MIN_INFLUENCE_SCORE, MAX_INFLUENCE_SCORE
                    )

    @classmethod
    def from_scores(cls, scores: dict[tuple[int, int], int]) -> InfluenceMatrix:
        """Build a matrix with known scores instead of random ones."""
        matrix = cls([], random.Random())
        matrix._scores = dict(scores)
        return matrix

    def score(self, source: int, target: int) -> int:
        """Influence `source` holds over `target`. 0 for unknown pairs."""
        return self._scores.get((source, target), 0)

    def total_over(self, source: int, others: Sequence[Actor]) -> int:
        return sum(self.score(source, o.id) for o in others if o.id != source)

    def __len__(self) -> int:
        return len(self._scores)


class InfluenceStrategy:
    """Vote for the candidate with the lowest score; first one found wins ties."""

    def __init__(self, influence: InfluenceMatrix) -> None:
        self.influence = influence

    def choose_target(self, actor: Actor, roster: Roster, rng: random.Random) -> int | None:
        targets = candidate_targets(actor, roster)
        if not targets:
            return None
        return min(targets, key=lambda t: self.influence.score(actor.id, t.id)).id


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def build_strategies(
    voting_strategy: VotingStrategy,
    simulation_type: SimulationType,
    influence: InfluenceMatrix | None = None,
) -> dict[Faction, VoteStrategy]:
    """Pick the per-faction strategies for one game."""
    if simulation_type == SimulationType.INFLUENCE:
        if influence is None:
            raise ValueError("influence games need an InfluenceMatrix")
        shared = InfluenceStrategy(influence)
        return {Faction.LOYALIST: shared, Faction.TRAITOR: shared}

    loyalist: VoteStrategy
    if voting_strategy == VotingStrategy.FIXATE:
        loyalist = FixationStrategy()
    else:
        loyalist = RandomStrategy()
    return {Faction.LOYALIST: loyalist, Faction.TRAITOR: RandomStrategy()}
