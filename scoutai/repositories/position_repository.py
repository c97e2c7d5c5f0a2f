"""
Position Repository for football position data access.
"""
from typing import Optional, List, Union

from scoutai.models import Position, PositionGroup
from scoutai.repositories.base import BaseRepository


class PositionRepository(BaseRepository[Position]):
    """Repository for position data access."""

    def __init__(self, db):
        super().__init__(Position, db)

    def find_by_name(self, name: str) -> Optional[Position]:
        """Find a position by exact name (e.g. "Centre-Back")."""
        return self.where_first(Position.name == name)

    def find_by_group(self, group: Union[PositionGroup, str]) -> List[Position]:
        """Find all positions of a position group."""
        value = group.value if isinstance(group, PositionGroup) else group
        return self.db.query(Position).filter(
            Position.position_group == value
        ).order_by(Position.name).all()

    def get_or_create(self, name: str, position_group: Union[PositionGroup, str]) -> Position:
        """
        Find a position by name, or create it if not found.

        The group of an existing position is left untouched.
        """
        position = self.find_by_name(name)
        if position is None:
            value = position_group.value if isinstance(position_group, PositionGroup) else position_group
            position = self.create(name=name, position_group=value)
        return position
