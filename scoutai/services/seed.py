"""
Reference data seeding.

Standard football positions, grouped the way Transfermarkt lists them.
Seeding is idempotent: positions that already exist are left as they are.
"""
import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from scoutai.models import Position, PositionGroup
from scoutai.repositories.position_repository import PositionRepository

logger = logging.getLogger(__name__)

STANDARD_POSITIONS: List[Tuple[str, PositionGroup]] = [
    ("Goalkeeper", PositionGroup.GOALKEEPER),
    ("Centre-Back", PositionGroup.DEFENDER),
    ("Left-Back", PositionGroup.DEFENDER),
    ("Right-Back", PositionGroup.DEFENDER),
    ("Defensive Midfield", PositionGroup.MIDFIELDER),
    ("Central Midfield", PositionGroup.MIDFIELDER),
    ("Attacking Midfield", PositionGroup.MIDFIELDER),
    ("Left Midfield", PositionGroup.MIDFIELDER),
    ("Right Midfield", PositionGroup.MIDFIELDER),
    ("Left Winger", PositionGroup.FORWARD),
    ("Right Winger", PositionGroup.FORWARD),
    ("Second Striker", PositionGroup.FORWARD),
    ("Centre-Forward", PositionGroup.FORWARD),
]


def seed_positions(db: Session) -> List[Position]:
    """
    Ensure every standard position exists and commit.

    Returns:
        The positions that were newly created
    """
    repo = PositionRepository(db)
    created = []
    for name, group in STANDARD_POSITIONS:
        if repo.find_by_name(name) is None:
            created.append(repo.create(name=name, position_group=group.value))
    repo.save()

    logger.info(f"Seeded {len(created)} positions ({len(STANDARD_POSITIONS) - len(created)} already present)")
    return created
