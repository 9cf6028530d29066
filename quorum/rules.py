"""
End-condition policy. Chosen once per game, consulted by the round engine.
"""
from __future__ import annotations

from dataclasses import dataclass

from quorum.actor import Actor
from quorum.config import EndCondition, Outcome, SimulationType
from quorum.roster import Roster


def determine_outcome(roster: Roster, end_condition: EndCondition) -> Outcome:
    """Outcome of a finished game from its final roster."""
    if end_condition == EndCondition.FIRST_TRAITOR_REMOVED:
        if not roster.active_loyalists():
            return Outcome.NO_LOYALISTS
        return Outcome.TRAITOR_REMOVED
    if not roster.active_traitors():
        return Outcome.ALL_LOYALISTS
    return Outcome.ALL_TRAITORS


@dataclass(frozen=True)
class EndRule:
    """
    When a game stops. Both conditions stop on faction elimination;
    first_traitor_removed also stops as soon as phase one removes a traitor.
    """
    end_condition: EndCondition
    stop_on_first_traitor: bool

    @classmethod
    def for_game(cls, end_condition: EndCondition, simulation_type: SimulationType) -> EndRule:
        if simulation_type == SimulationType.INFLUENCE:
            # Influence games play until a faction is gone but report
            # first_traitor_removed outcomes.
            return cls(EndCondition.FIRST_TRAITOR_REMOVED, stop_on_first_traitor=False)
        return cls(
            end_condition,
            stop_on_first_traitor=end_condition == EndCondition.FIRST_TRAITOR_REMOVED,
        )

    def ends_after_phase_one(self, roster: Roster, removed: Actor) -> bool:
        if self.stop_on_first_traitor and removed.is_traitor:
            return True
        return roster.faction_eliminated()

    def ends_after_phase_two(self, roster: Roster) -> bool:
        return roster.faction_eliminated()

    def outcome(self, roster: Roster) -> Outcome:
        return determine_outcome(roster, self.end_condition)
