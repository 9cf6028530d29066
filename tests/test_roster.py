"""Tests for Roster: ids, faction views, removal."""
import pytest

from quorum.config import ActorStatus, Faction
from quorum.roster import Roster


class TestInitialize:
    def test_contiguous_ids_loyalists_first(self):
        roster = Roster(3, 2)
        assert [a.id for a in roster] == [0, 1, 2, 3, 4]
        assert [a.faction for a in roster] == [Faction.LOYALIST] * 3 + [Faction.TRAITOR] * 2

    def test_everyone_starts_active(self):
        roster = Roster(4, 1)
        assert all(a.status == ActorStatus.ACTIVE for a in roster)
        assert len(roster.active_actors()) == 5

    @pytest.mark.parametrize("loyalists,traitors", [(0, 1), (1, 0), (-2, 3), (0, 0)])
    def test_non_positive_counts_raise(self, loyalists, traitors):
        with pytest.raises(ValueError, match="at least 1 loyalist"):
            Roster(loyalists, traitors)


class TestViews:
    def test_faction_views(self):
        roster = Roster(3, 2)
        assert [a.id for a in roster.active_loyalists()] == [0, 1, 2]
        assert [a.id for a in roster.active_traitors()] == [3, 4]

    def test_views_reflect_removal(self):
        roster = Roster(3, 2)
        roster.mark_removed(1, round_num=1)
        roster.mark_removed(4, round_num=1)
        assert [a.id for a in roster.active_actors()] == [0, 2, 3]
        assert [a.id for a in roster.active_loyalists()] == [0, 2]
        assert [a.id for a in roster.active_traitors()] == [3]

    def test_removed_actors_stay_in_roster(self):
        roster = Roster(2, 1)
        roster.mark_removed(0, round_num=3)
        assert len(roster) == 3
        assert roster.get(0).status == ActorStatus.REMOVED
        assert roster.get(0).removed_round == 3

    def test_get_unknown_id_raises(self):
        roster = Roster(2, 1)
        with pytest.raises(KeyError):
            roster.get(3)
        with pytest.raises(KeyError):
            roster.get(-1)

    def test_faction_eliminated(self):
        roster = Roster(2, 1)
        assert not roster.faction_eliminated()
        roster.mark_removed(2, round_num=1)
        assert roster.faction_eliminated()

    def test_faction_eliminated_when_loyalists_gone(self):
        roster = Roster(2, 2)
        roster.mark_removed(0, round_num=1)
        assert not roster.faction_eliminated()
        roster.mark_removed(1, round_num=1)
        assert roster.faction_eliminated()


class TestSnapshot:
    def test_snapshot_is_a_copy(self):
        roster = Roster(2, 1)
        snap = roster.snapshot()
        roster.mark_removed(0, round_num=1)
        assert [a.id for a in snap] == [0, 1, 2]
        assert snap[0].active

    def test_snapshot_only_active(self):
        roster = Roster(2, 1)
        roster.mark_removed(1, round_num=1)
        assert [a.id for a in roster.snapshot()] == [0, 2]


class TestMarkRemoved:
    def test_double_removal_is_a_bug(self):
        roster = Roster(2, 1)
        roster.mark_removed(0, round_num=1)
        with pytest.raises(AssertionError):
            roster.mark_removed(0, round_num=2)

    def test_returns_removed_actor(self):
        roster = Roster(2, 1)
        actor = roster.mark_removed(2, round_num=1)
        assert actor.id == 2
        assert actor.is_traitor
        assert not actor.active
