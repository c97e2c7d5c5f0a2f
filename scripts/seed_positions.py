#!/usr/bin/env python3
"""
Seed the standard football positions.

Safe to run repeatedly: existing positions are skipped.
"""
import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from scoutai.core.logging import configure_from_settings, get_logger

logger = get_logger(__name__)


def main():
    configure_from_settings()

    from scoutai.core.database import session_scope
    from scoutai.services.seed import seed_positions

    with session_scope() as db:
        for position in seed_positions(db):
            logger.info(f"Created position {position.name} ({position.position_group})")


if __name__ == "__main__":
    main()
