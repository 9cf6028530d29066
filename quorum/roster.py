"""
Actor registry. Owns every actor of one game and exposes live filtered views.
"""
from __future__ import annotations

from collections.abc import Iterator

from quorum.actor import Actor
from quorum.config import Faction


class Roster:
    """
    Ordered list of actors. Loyalists get ids [0, L), traitors [L, L+T).
    Removed actors stay in the list for the round history.
    """

    def __init__(self, loyalist_count: int, traitor_count: int) -> None:
        if loyalist_count < 1 or traitor_count < 1:
            raise ValueError(
                f"need at least 1 loyalist and 1 traitor, got {loyalist_count} and {traitor_count}"
            )
        self.loyalist_count = loyalist_count
        self.traitor_count = traitor_count
        self._actors: list[Actor] = [
            Actor(id=i, faction=Faction.LOYALIST) for i in range(loyalist_count)
        ]
        self._actors.extend(
            Actor(id=i, faction=Faction.TRAITOR)
            for i in range(loyalist_count, loyalist_count + traitor_count)
        )

    def __len__(self) -> int:
        return len(self._actors)

    def __iter__(self) -> Iterator[Actor]:
        return iter(self._actors)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get(self, actor_id: int) -> Actor:
        # ids are contiguous list indices
        if not 0 <= actor_id < len(self._actors):
            raise KeyError(f"no actor with id {actor_id}")
        return self._actors[actor_id]

    def active_actors(self) -> list[Actor]:
        return [a for a in self._actors if a.active]

    def active_loyalists(self) -> list[Actor]:
        return [a for a in self._actors if a.active and a.is_loyalist]

    def active_traitors(self) -> list[Actor]:
        return [a for a in self._actors if a.active and a.is_traitor]

    def faction_eliminated(self) -> bool:
        """True once either side has no active member left."""
        return not self.active_loyalists() or not self.active_traitors()

    def snapshot(self) -> tuple[Actor, ...]:
        """Copies of the active actors, safe to keep in history."""
        return tuple(a.copy() for a in self._actors if a.active)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def mark_removed(self, actor_id: int, round_num: int) -> Actor:
        actor = self.get(actor_id)
        actor.remove(round_num)
        return actor
