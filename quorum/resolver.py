"""
Round resolution.

Round order:
  1. Phase one -- every active actor votes, most-voted actor is removed.
     Ties re-vote among the tied actors only (at most MAX_TIE_BREAKS times),
     then fall back to a uniform pick from all active actors.
  2. End check (EndRule.ends_after_phase_one).
  3. Phase two -- one active loyalist is removed.
  4. End check (EndRule.ends_after_phase_two).
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from quorum.actor import Actor
from quorum.config import Faction
from quorum.roster import Roster
from quorum.rules import EndRule
from quorum.strategies import InfluenceMatrix, VoteStrategy, random_tie_break_vote

logger = logging.getLogger("quorum.resolver")

MAX_TIE_BREAKS = 10


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

VoteTally = dict[int, int]


@dataclass
class PhaseOneResult:
    votes: VoteTally
    removed_id: int
    tie_break_attempts: int = 0
    forced: bool = False    # removed by fallback, not by the tally


@dataclass(frozen=True)
class RoundResult:
    round_number: int
    phase_one_votes: VoteTally
    phase_one_removed: int
    phase_two_removed: int | None
    remaining_actors: tuple[Actor, ...]
    tie_break_attempts: int = 0

    def to_dict(self) -> dict:
        return {
            "round_number": self.round_number,
            "phase_one_votes": {str(k): v for k, v in self.phase_one_votes.items()},
            "phase_one_removed": self.phase_one_removed,
            "phase_two_removed": self.phase_two_removed,
            "remaining_actors": [a.to_dict() for a in self.remaining_actors],
            "tie_break_attempts": self.tie_break_attempts,
        }


# ---------------------------------------------------------------------------
# Voting
# ---------------------------------------------------------------------------

def conduct_vote(
    roster: Roster,
    strategies: dict[Faction, VoteStrategy],
    rng: random.Random,
) -> VoteTally:
    """Every active actor votes once with its faction's strategy. Abstentions are skipped."""
    votes: VoteTally = {}
    for actor in roster.active_actors():
        target = strategies[actor.faction].choose_target(actor, roster, rng)
        if target is not None:
            votes[target] = votes.get(target, 0) + 1
    return votes


def conduct_tie_break_vote(tied: list[Actor], rng: random.Random) -> VoteTally:
    """Restricted re-vote: only tied actors vote, only for tied actors."""
    votes: VoteTally = {}
    for _voter in tied:
        target = random_tie_break_vote(tied, rng)
        if target is not None:
            votes[target] = votes.get(target, 0) + 1
    return votes


def find_most_voted(votes: VoteTally) -> list[int]:
    """Ids sharing the highest vote count, in tally order. Empty tally -> []."""
    if not votes:
        return []
    top = max(votes.values())
    return [actor_id for actor_id, count in votes.items() if count == top]


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------

def resolve_phase_one(
    roster: Roster,
    strategies: dict[Faction, VoteStrategy],
    rng: random.Random,
    round_num: int,
) -> PhaseOneResult:
    """Vote, break ties, remove one actor. Only the final tally is kept."""
    votes = conduct_vote(roster, strategies, rng)
    most_voted = find_most_voted(votes)
    attempts = 0

    while len(most_voted) > 1 and attempts < MAX_TIE_BREAKS:
        tied = [roster.get(aid) for aid in most_voted]
        votes = conduct_tie_break_vote(tied, rng)
        most_voted = find_most_voted(votes)
        attempts += 1

    forced = len(most_voted) != 1
    if forced:
        removed_id = rng.choice(roster.active_actors()).id
        logger.debug(
            "Round %d: no single most-voted actor after %d tie-breaks, removing %d at random",
            round_num, attempts, removed_id,
        )
    else:
        removed_id = most_voted[0]

    roster.mark_removed(removed_id, round_num)
    return PhaseOneResult(
        votes=votes,
        removed_id=removed_id,
        tie_break_attempts=attempts,
        forced=forced,
    )


def resolve_phase_two(
    roster: Roster,
    rng: random.Random,
    round_num: int,
    influence: InfluenceMatrix | None = None,
) -> int | None:
    """
    Remove one active loyalist. Uniform at random, or with an influence
    matrix the loyalist holding the most total influence over the others.
    Returns None when no loyalist is left.
    """
    loyalists = roster.active_loyalists()
    if not loyalists:
        return None

    if influence is None:
        victim = rng.choice(loyalists)
    else:
        active = roster.active_actors()
        # max() keeps the first loyalist on equal totals
        victim = max(loyalists, key=lambda a: influence.total_over(a.id, active))

    roster.mark_removed(victim.id, round_num)
    return victim.id


def resolve_round(
    roster: Roster,
    strategies: dict[Faction, VoteStrategy],
    rule: EndRule,
    rng: random.Random,
    round_num: int,
    influence: InfluenceMatrix | None = None,
) -> tuple[RoundResult, bool]:
    """Play one full round. Returns the round record and whether the game is over."""
    phase_one = resolve_phase_one(roster, strategies, rng, round_num)
    removed = roster.get(phase_one.removed_id)

    phase_two_removed: int | None = None
    finished = rule.ends_after_phase_one(roster, removed)
    if not finished:
        phase_two_removed = resolve_phase_two(roster, rng, round_num, influence)
        finished = rule.ends_after_phase_two(roster)

    result = RoundResult(
        round_number=round_num,
        phase_one_votes=dict(phase_one.votes),
        phase_one_removed=phase_one.removed_id,
        phase_two_removed=phase_two_removed,
        remaining_actors=roster.snapshot(),
        tie_break_attempts=phase_one.tie_break_attempts,
    )
    logger.debug(
        "Round %d: removed %d%s, %d active",
        round_num,
        phase_one.removed_id,
        f" and {phase_two_removed}" if phase_two_removed is not None else "",
        len(result.remaining_actors),
    )
    return result, finished
