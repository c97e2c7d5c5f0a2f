"""
Team Repository for club data access.
"""
from typing import Optional, List

from scoutai.models import Team
from scoutai.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for team data access."""

    def __init__(self, db):
        super().__init__(Team, db)

    def find_by_name(self, name: str) -> Optional[Team]:
        """Find a team by exact name."""
        return self.where_first(Team.name == name)

    def search_by_name(self, name: str, limit: int = 10) -> List[Team]:
        """Case-insensitive partial name search."""
        return self.db.query(Team).filter(
            Team.name.ilike(f"%{name}%")
        ).order_by(Team.name).limit(limit).all()

    def find_by_league(self, league_id: int) -> List[Team]:
        """Find all teams that reference a league."""
        return self.db.query(Team).filter(
            Team.league_id == league_id
        ).order_by(Team.name).all()
