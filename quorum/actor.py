"""
Actor runtime state. No voting logic -- just identity, faction and status.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from quorum.config import ActorStatus, Faction


@dataclass
class Actor:
    id: int
    faction: Faction
    status: ActorStatus = ActorStatus.ACTIVE
    removed_round: int | None = None

    @property
    def active(self) -> bool:
        return self.status == ActorStatus.ACTIVE

    @property
    def is_loyalist(self) -> bool:
        return self.faction == Faction.LOYALIST

    @property
    def is_traitor(self) -> bool:
        return self.faction == Faction.TRAITOR

    def remove(self, round_num: int) -> None:
        """Mark this actor as removed. Removed actors never come back."""
        assert self.active, f"actor {self.id} already removed in round {self.removed_round}"
        self.status = ActorStatus.REMOVED
        self.removed_round = round_num

    def copy(self) -> Actor:
        return replace(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "faction": self.faction.value,
            "status": self.status.value,
            "removed_round": self.removed_round,
        }
