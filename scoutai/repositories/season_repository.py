"""
Season Repository for season data access.
"""
from typing import Optional

from scoutai.models import Season
from scoutai.repositories.base import BaseRepository


class SeasonRepository(BaseRepository[Season]):
    """Repository for season data access."""

    def __init__(self, db):
        super().__init__(Season, db)

    def find_by_name(self, name: str) -> Optional[Season]:
        """Find a season by name (e.g. "2024/25")."""
        return self.where_first(Season.name == name)

    def find_by_start_year(self, start_year: int) -> Optional[Season]:
        return self.where_first(Season.start_year == start_year)

    def find_latest(self) -> Optional[Season]:
        """The season with the most recent start year."""
        return self.db.query(Season).order_by(
            Season.start_year.desc(), Season.end_year.desc()
        ).first()
