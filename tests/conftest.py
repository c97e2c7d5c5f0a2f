"""Shared pytest fixtures for scoutai tests."""
import sys
from pathlib import Path
from datetime import date
from typing import Generator

import pytest
from sqlalchemy.orm import sessionmaker, Session

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(scope="function")
def db_engine():
    """Fresh in-memory SQLite engine with foreign keys enforced."""
    from scoutai.core.database import build_engine
    from scoutai.models import Base

    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create test database session with an isolated in-memory database."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def league_repo(db_session: Session):
    from scoutai.repositories import LeagueRepository
    return LeagueRepository(db_session)


@pytest.fixture
def team_repo(db_session: Session):
    from scoutai.repositories import TeamRepository
    return TeamRepository(db_session)


@pytest.fixture
def season_repo(db_session: Session):
    from scoutai.repositories import SeasonRepository
    return SeasonRepository(db_session)


@pytest.fixture
def position_repo(db_session: Session):
    from scoutai.repositories import PositionRepository
    return PositionRepository(db_session)


@pytest.fixture
def player_repo(db_session: Session):
    from scoutai.repositories import PlayerRepository
    return PlayerRepository(db_session)


@pytest.fixture
def season_stats_repo(db_session: Session):
    from scoutai.repositories import PlayerSeasonStatsRepository
    return PlayerSeasonStatsRepository(db_session)


@pytest.fixture
def matchday_stats_repo(db_session: Session):
    from scoutai.repositories import PlayerMatchdayStatsRepository
    return PlayerMatchdayStatsRepository(db_session)


@pytest.fixture
def premier_league(league_repo):
    """A committed Premier League row."""
    league = league_repo.create(
        name="Premier League",
        country="England",
        tier=1,
        has_advanced_stats=True,
        fbref_id="9",
    )
    league_repo.save()
    return league


@pytest.fixture
def arsenal(team_repo, premier_league):
    team = team_repo.create(
        name="Arsenal",
        league_id=premier_league.id,
        country="England",
        stadium="Emirates Stadium",
    )
    team_repo.save()
    return team


@pytest.fixture
def sample_positions(position_repo):
    """Striker, winger and centre-back positions."""
    positions = {
        "striker": position_repo.create(name="Centre-Forward", position_group="Forward"),
        "winger": position_repo.create(name="Right Winger", position_group="Forward"),
        "centre_back": position_repo.create(name="Centre-Back", position_group="Defender"),
    }
    position_repo.save()
    return positions


def make_player_kwargs(**overrides):
    """Valid player fields; override any of them per test."""
    defaults = {
        "full_name": "Bukayo Saka",
        "date_of_birth": date(2001, 9, 5),
        "nationality": "England",
        "height_cm": 178,
        "foot": "left",
        "transfermarkt_id": "433177",
        "fbref_id": "bc7dc64d",
        "current_market_value_eur": 150_000_000,
        "contract_expires": date(2027, 6, 30),
    }
    defaults.update(overrides)
    return defaults


@pytest.fixture
def saka(player_repo, arsenal):
    player = player_repo.create(**make_player_kwargs(current_team_id=arsenal.id))
    player_repo.save()
    return player
