#!/usr/bin/env python3
"""
Initialize database tables from SQLAlchemy models.

Creates all scouting tables (leagues, teams, seasons, positions, players,
player_positions, player_season_stats, player_matchday_stats).

Usage:
    python scripts/init_database.py            # create missing tables
    python scripts/init_database.py --drop     # drop and recreate
    python scripts/init_database.py --seed     # also seed standard positions
"""
import argparse
import sys
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from scoutai.core.logging import configure_from_settings, get_logger

logger = get_logger(__name__)


def main():
    """Create all database tables from models."""
    parser = argparse.ArgumentParser(description="Create the scouting database schema")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first")
    parser.add_argument("--seed", action="store_true", help="Seed standard positions")
    args = parser.parse_args()

    configure_from_settings()

    from scoutai.core.database import drop_db, init_db, session_scope

    if args.drop:
        logger.warning("Dropping all scouting tables...")
        drop_db()

    logger.info("Creating database tables from SQLAlchemy models...")
    init_db()
    logger.info("All database tables created")

    if args.seed:
        from scoutai.services.seed import seed_positions
        with session_scope() as db:
            seed_positions(db)


if __name__ == "__main__":
    main()
