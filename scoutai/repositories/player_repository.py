"""
Player Repository for player data access.

This repository encapsulates all database queries related to players,
including the player <-> position association and the cascade delete of a
player's stats.

Usage:
    repo = PlayerRepository(db)
    player = repo.find_by_transfermarkt_id("433177")
    repo.add_position(player, striker)
    repo.delete(player.id)
"""
from datetime import date
from typing import Optional, List, Union

from scoutai.core.logging import get_logger
from scoutai.models import (
    Player,
    Position,
    PositionGroup,
    PlayerSeasonStats,
    PlayerMatchdayStats,
    player_positions,
)
from scoutai.repositories.base import BaseRepository
from scoutai.utils.timezone import utc_today

logger = get_logger(__name__)


class PlayerRepository(BaseRepository[Player]):
    """Repository for player data access."""

    def __init__(self, db):
        """Initialize the player repository."""
        super().__init__(Player, db)

    # ========================================================================
    # External ID Lookups
    # ========================================================================

    def find_by_transfermarkt_id(self, transfermarkt_id: str) -> Optional[Player]:
        """Find a player by Transfermarkt ID."""
        return self.where_first(Player.transfermarkt_id == transfermarkt_id)

    def find_by_fbref_id(self, fbref_id: str) -> Optional[Player]:
        """Find a player by FBref ID."""
        return self.where_first(Player.fbref_id == fbref_id)

    # ========================================================================
    # Name-based Lookups
    # ========================================================================

    def find_by_name(self, full_name: str) -> Optional[Player]:
        """Find a player by exact name match."""
        return self.where_first(Player.full_name == full_name)

    def search_by_name(self, name: str, limit: int = 10) -> List[Player]:
        """
        Search for players by name (case-insensitive partial match).

        Args:
            name: Name or partial name to search for
            limit: Maximum number of results

        Returns:
            List of matching players
        """
        search_pattern = f"%{name.lower()}%"
        return self.db.query(Player).filter(
            Player.full_name.ilike(search_pattern)
        ).order_by(Player.full_name).limit(limit).all()

    # ========================================================================
    # Team / Nationality / Position Queries
    # ========================================================================

    def find_by_team(self, team_id: int) -> List[Player]:
        """Find all players whose current team is ``team_id``."""
        return self.db.query(Player).filter(
            Player.current_team_id == team_id
        ).order_by(Player.full_name).all()

    def find_by_nationality(self, nationality: str) -> List[Player]:
        return self.db.query(Player).filter(
            Player.nationality == nationality
        ).order_by(Player.full_name).all()

    def find_by_position_group(self, group: Union[PositionGroup, str]) -> List[Player]:
        """
        Find players holding at least one position of a group.

        Args:
            group: Position group (e.g. PositionGroup.FORWARD or "Forward")

        Returns:
            Distinct players ordered by name
        """
        value = group.value if isinstance(group, PositionGroup) else group
        return self.db.query(Player).join(
            player_positions, player_positions.c.player_id == Player.id
        ).join(
            Position, Position.id == player_positions.c.position_id
        ).filter(
            Position.position_group == value
        ).distinct().order_by(Player.full_name).all()

    # ========================================================================
    # Contract Queries
    # ========================================================================

    def find_contracts_expiring(
        self,
        before: date,
        today: Optional[date] = None
    ) -> List[Player]:
        """
        Find players whose contract is still active but expires on or before a date.

        Args:
            before: Last expiry date to include
            today: Reference date for "still active" (defaults to current UTC date)

        Returns:
            Players ordered by contract expiry
        """
        today = today or utc_today()
        return self.db.query(Player).filter(
            Player.contract_expires.isnot(None),
            Player.contract_expires > today,
            Player.contract_expires <= before
        ).order_by(Player.contract_expires).all()

    # ========================================================================
    # Position Association
    # ========================================================================

    def add_position(self, player: Player, position: Position) -> Player:
        """
        Associate a position with a player on both sides and persist it.

        Adding a position the player already holds changes nothing. A new
        position pulled in this way is validated when the session flushes.
        """
        if position in player.positions:
            return player
        player.add_position(position)
        self.touch(player)
        self.flush()
        return player

    def remove_position(self, player: Player, position: Position) -> Player:
        """Remove a position from a player on both sides and persist it."""
        if position not in player.positions:
            return player
        player.remove_position(position)
        self.touch(player)
        self.flush()
        return player

    # ========================================================================
    # Delete (cascades to stats)
    # ========================================================================

    def delete(self, id: int) -> bool:
        """
        Delete a player together with all of its season and matchday stats.

        Returns:
            True if deleted, False if not found
        """
        player = self.find_by_id(id)
        if player is None:
            return False

        season_count = self.db.query(PlayerSeasonStats).filter(
            PlayerSeasonStats.player_id == id
        ).count()
        matchday_count = self.db.query(PlayerMatchdayStats).filter(
            PlayerMatchdayStats.player_id == id
        ).count()

        self.db.delete(player)
        self.flush()

        logger.info(
            f"Deleted player {id} with {season_count} season stats "
            f"and {matchday_count} matchday stats",
            extra={"player_id": id},
        )
        return True
