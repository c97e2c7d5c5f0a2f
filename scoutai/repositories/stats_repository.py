"""
Repositories for player season and matchday stats.

Stats rows are owned by their player: they are created through a player and
removed when the player is deleted.
"""
from typing import List

from scoutai.models import Player, PlayerSeasonStats, PlayerMatchdayStats
from scoutai.repositories.base import BaseRepository


class PlayerSeasonStatsRepository(BaseRepository[PlayerSeasonStats]):
    """Repository for per-season player stats."""

    def __init__(self, db):
        super().__init__(PlayerSeasonStats, db)

    def create_for_player(self, player: Player, **kwargs) -> PlayerSeasonStats:
        """Create a season stats row owned by ``player``."""
        stats = PlayerSeasonStats(**kwargs)
        player.season_stats.add(stats)
        return self.add(stats)

    def find_by_player(self, player_id: int) -> List[PlayerSeasonStats]:
        return self.db.query(PlayerSeasonStats).filter(
            PlayerSeasonStats.player_id == player_id
        ).order_by(PlayerSeasonStats.season_id).all()

    def find_by_season(self, season_id: int, league_id: int = None) -> List[PlayerSeasonStats]:
        """Find stats of a season, optionally narrowed to one league."""
        query = self.db.query(PlayerSeasonStats).filter(
            PlayerSeasonStats.season_id == season_id
        )
        if league_id is not None:
            query = query.filter(PlayerSeasonStats.league_id == league_id)
        return query.all()

    def find_by_league(self, league_id: int) -> List[PlayerSeasonStats]:
        return self.where(PlayerSeasonStats.league_id == league_id)


class PlayerMatchdayStatsRepository(BaseRepository[PlayerMatchdayStats]):
    """Repository for per-matchday player stats."""

    def __init__(self, db):
        super().__init__(PlayerMatchdayStats, db)

    def create_for_player(self, player: Player, **kwargs) -> PlayerMatchdayStats:
        """Create a matchday stats row owned by ``player``."""
        stats = PlayerMatchdayStats(**kwargs)
        player.matchday_stats.add(stats)
        return self.add(stats)

    def find_by_player(self, player_id: int) -> List[PlayerMatchdayStats]:
        return self.db.query(PlayerMatchdayStats).filter(
            PlayerMatchdayStats.player_id == player_id
        ).order_by(PlayerMatchdayStats.matchday_id).all()

    def find_by_matchday(self, matchday_id: int) -> List[PlayerMatchdayStats]:
        return self.where(PlayerMatchdayStats.matchday_id == matchday_id)
