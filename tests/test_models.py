"""
Tests for entity behaviour that needs no database.

Covers derived player values (age, contract status) and the two-sided
player <-> position association.
"""
from datetime import date

import pytest

from scoutai.models import League, Player, Position, PositionGroup


def _player(**kwargs) -> Player:
    kwargs.setdefault("full_name", "Test Player")
    kwargs.setdefault("date_of_birth", date(2000, 6, 15))
    return Player(**kwargs)


class TestPlayerAge:
    """Age is the difference of calendar years."""

    def test_age_ignores_month_and_day(self):
        """Born on the last day of the year, observed on the first day."""
        player = _player(date_of_birth=date(2000, 12, 31))
        assert player.age(today=date(2024, 1, 1)) == 24

    def test_age_on_birthday(self):
        player = _player(date_of_birth=date(1995, 3, 10))
        assert player.age(today=date(2025, 3, 10)) == 30

    def test_age_defaults_to_current_date(self, monkeypatch):
        import scoutai.models.models as models_module

        monkeypatch.setattr(models_module, "utc_today", lambda: date(2024, 1, 1))
        player = _player(date_of_birth=date(2000, 12, 31))
        assert player.age() == 24


class TestContractStatus:
    """has_active_contract() is True only for an expiry strictly in the future."""

    TODAY = date(2025, 1, 15)

    def test_past_expiry_is_inactive(self):
        player = _player(contract_expires=date(2024, 6, 30))
        assert player.has_active_contract(today=self.TODAY) is False

    def test_future_expiry_is_active(self):
        player = _player(contract_expires=date(2026, 6, 30))
        assert player.has_active_contract(today=self.TODAY) is True

    def test_no_expiry_is_inactive(self):
        player = _player(contract_expires=None)
        assert player.has_active_contract(today=self.TODAY) is False

    def test_expiry_today_is_inactive(self):
        player = _player(contract_expires=self.TODAY)
        assert player.has_active_contract(today=self.TODAY) is False


class TestPositionAssociation:
    """Both sides of player <-> position move together."""

    @pytest.fixture
    def striker(self):
        return Position(name="Centre-Forward", position_group=PositionGroup.FORWARD.value)

    def test_add_position_updates_both_sides(self, striker):
        player = _player()

        player.add_position(striker)

        assert striker in player.positions
        assert player in striker.players

    def test_remove_position_updates_both_sides(self, striker):
        player = _player()
        player.add_position(striker)

        player.remove_position(striker)

        assert striker not in player.positions
        assert player not in striker.players

    def test_add_position_twice_is_idempotent(self, striker):
        player = _player()

        player.add_position(striker)
        player.add_position(striker)

        assert len(player.positions) == 1
        assert len(striker.players) == 1

    def test_remove_unheld_position_is_noop(self, striker):
        player = _player()
        player.remove_position(striker)
        assert player.positions == set()

    def test_position_shared_by_players(self, striker):
        first = _player(full_name="First Player")
        second = _player(full_name="Second Player")

        first.add_position(striker)
        second.add_position(striker)

        assert striker.players == {first, second}


class TestDefaults:

    def test_league_advanced_stats_defaults_to_false(self):
        league = League(name="Serie A", country="Italy", tier=1)
        assert league.has_advanced_stats is False

    def test_league_advanced_stats_can_be_set(self):
        league = League(name="Serie A", country="Italy", tier=1, has_advanced_stats=True)
        assert league.has_advanced_stats is True

    def test_new_player_has_empty_collections(self):
        player = _player()
        assert player.positions == set()
        assert player.season_stats == set()
        assert player.matchday_stats == set()

    def test_repr_excludes_collections(self):
        player = _player(full_name="Declan Rice")
        assert repr(player) == "<Player id=None full_name='Declan Rice'>"

    def test_position_group_values(self):
        assert PositionGroup.values() == ("Goalkeeper", "Defender", "Midfielder", "Forward")
