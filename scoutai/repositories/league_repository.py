"""
League Repository for league data access.

Usage:
    repo = LeagueRepository(db)
    league = repo.create(name="Premier League", country="England", tier=1)
    same = repo.find_by_fbref_id("9")
"""
from typing import Optional, List

from scoutai.models import League
from scoutai.repositories.base import BaseRepository


class LeagueRepository(BaseRepository[League]):
    """Repository for league data access."""

    def __init__(self, db):
        super().__init__(League, db)

    def find_by_name(self, name: str) -> Optional[League]:
        """Find a league by exact name."""
        return self.where_first(League.name == name)

    def find_by_fbref_id(self, fbref_id: str) -> Optional[League]:
        """Find a league by FBref ID."""
        return self.where_first(League.fbref_id == fbref_id)

    def find_by_country(self, country: str) -> List[League]:
        """Find all leagues of a country ordered by tier."""
        return self.db.query(League).filter(
            League.country == country
        ).order_by(League.tier).all()

    def find_with_advanced_stats(self) -> List[League]:
        """Find leagues that publish advanced stats."""
        return self.db.query(League).filter(
            League.has_advanced_stats.is_(True)
        ).order_by(League.name).all()
