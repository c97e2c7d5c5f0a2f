"""
Scouting data model.

Usage:
    from scoutai.models import Player, Position, League

    player = Player(full_name="Bukayo Saka", date_of_birth=date(2001, 9, 5))
    player.add_position(winger)
"""
from scoutai.models.models import (
    Base,
    PositionGroup,
    Foot,
    League,
    Team,
    Season,
    Position,
    Player,
    PlayerSeasonStats,
    PlayerMatchdayStats,
    player_positions,
)

__all__ = [
    "Base",
    "PositionGroup",
    "Foot",
    "League",
    "Team",
    "Season",
    "Position",
    "Player",
    "PlayerSeasonStats",
    "PlayerMatchdayStats",
    "player_positions",
]
