"""
Repository layer for data access.

Repositories are the write path to storage: they validate entities, stamp
timestamps, let the database assign identity and translate unique
constraint failures.

Usage:
    from scoutai.repositories import PlayerRepository
    from scoutai.core.database import session_scope

    with session_scope() as db:
        player_repo = PlayerRepository(db)
        player = player_repo.find_by_fbref_id("bc7dc64d")
"""

from scoutai.repositories.base import BaseRepository
from scoutai.repositories.league_repository import LeagueRepository
from scoutai.repositories.team_repository import TeamRepository
from scoutai.repositories.season_repository import SeasonRepository
from scoutai.repositories.position_repository import PositionRepository
from scoutai.repositories.player_repository import PlayerRepository
from scoutai.repositories.stats_repository import (
    PlayerSeasonStatsRepository,
    PlayerMatchdayStatsRepository,
)

__all__ = [
    "BaseRepository",
    "LeagueRepository",
    "TeamRepository",
    "SeasonRepository",
    "PositionRepository",
    "PlayerRepository",
    "PlayerSeasonStatsRepository",
    "PlayerMatchdayStatsRepository",
]
