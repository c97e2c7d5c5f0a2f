"""
Database models for the ScoutAI scouting application.

Reference entities (League, Team, Season, Position) are independent tables.
Team, League, Season and matchday references are stored as plain integer ids
rather than navigable relationships; callers resolve them with a separate
lookup. Player owns its season and matchday stats rows.

Identity is generated by the database on insert. ``created_at`` and
``updated_at`` are stamped by the repository layer (see
``scoutai.repositories.base``), not by column defaults.
"""
import enum
from datetime import date
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Table,
)
from sqlalchemy.orm import declarative_base, relationship

from scoutai.utils.timezone import utc_today

Base = declarative_base()

# SQLite only autoincrements an INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer(), "sqlite")
SmallIdType = SmallInteger().with_variant(Integer(), "sqlite")


class PositionGroup(str, enum.Enum):
    """Standard football position groups."""
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"

    @classmethod
    def values(cls) -> tuple:
        return tuple(member.value for member in cls)


class Foot(str, enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    BOTH = "both"

    @classmethod
    def values(cls) -> tuple:
        return tuple(member.value for member in cls)


# =============================================================================
# REFERENCE ENTITIES
# =============================================================================

class League(Base):
    """Football league (e.g. Premier League, Bundesliga)."""
    __tablename__ = "leagues"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    country = Column(String(100), nullable=False)
    tier = Column(SmallInteger, nullable=False)  # 1 = top flight
    has_advanced_stats = Column(Boolean, nullable=False, default=False)
    fbref_id = Column(String(50), nullable=True, unique=True)
    created_at = Column(DateTime, nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("has_advanced_stats", False)
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<League id={self.id} name={self.name!r} country={self.country!r} tier={self.tier}>"


class Team(Base):
    """Football club."""
    __tablename__ = "teams"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    league_id = Column(BigInteger, nullable=True, index=True)  # leagues.id, not enforced
    country = Column(String(100), nullable=True)
    stadium = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Team id={self.id} name={self.name!r} league_id={self.league_id}>"


class Season(Base):
    """Football season, named like "2024/25"."""
    __tablename__ = "seasons"

    id = Column(IdType, primary_key=True, autoincrement=True)
    name = Column(String(20), nullable=False, unique=True)
    start_year = Column(SmallInteger, nullable=False)
    end_year = Column(SmallInteger, nullable=False)

    def __repr__(self) -> str:
        return f"<Season id={self.id} name={self.name!r}>"


# =============================================================================
# PLAYER <-> POSITION
# =============================================================================

# Single authoritative record of which player plays which position
player_positions = Table(
    "player_positions",
    Base.metadata,
    Column("player_id", IdType, ForeignKey("players.id", ondelete="CASCADE"), primary_key=True),
    Column("position_id", SmallIdType, ForeignKey("positions.id", ondelete="CASCADE"), primary_key=True),
)


class Position(Base):
    """Football position (GK, CB, ST, ...) belonging to one position group."""
    __tablename__ = "positions"

    id = Column(SmallIdType, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)
    position_group = Column(String(20), nullable=False)

    players = relationship(
        "Player",
        secondary=player_positions,
        back_populates="positions",
        collection_class=set,
    )

    def __repr__(self) -> str:
        return f"<Position id={self.id} name={self.name!r} group={self.position_group!r}>"


# =============================================================================
# PLAYER
# =============================================================================

class Player(Base):
    """
    Football player tracked by the scouting system.

    Age and contract status are derived from ``date_of_birth`` and
    ``contract_expires`` and are never stored.
    """
    __tablename__ = "players"

    id = Column(IdType, primary_key=True, autoincrement=True)

    # External data source ids
    transfermarkt_id = Column(String(50), nullable=True, unique=True)
    fbref_id = Column(String(50), nullable=True, unique=True)

    full_name = Column(String(255), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    nationality = Column(String(100), nullable=True)
    height_cm = Column(SmallInteger, nullable=True)
    foot = Column(String(10), nullable=True)  # left, right, both

    current_team_id = Column(BigInteger, nullable=True, index=True)  # teams.id, not enforced
    current_market_value_eur = Column(Integer, nullable=True)
    contract_expires = Column(Date, nullable=True)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    # -------------------------------------------------------------------------
    # RELATIONSHIPS
    # -------------------------------------------------------------------------
    positions = relationship(
        "Position",
        secondary=player_positions,
        back_populates="players",
        collection_class=set,
    )
    season_stats = relationship(
        "PlayerSeasonStats",
        back_populates="player",
        cascade="all, delete-orphan",
        collection_class=set,
    )
    matchday_stats = relationship(
        "PlayerMatchdayStats",
        back_populates="player",
        cascade="all, delete-orphan",
        collection_class=set,
    )

    __table_args__ = (
        Index("idx_players_full_name", "full_name"),
        Index("idx_players_dob", "date_of_birth"),
        Index("idx_players_nationality", "nationality"),
    )

    def age(self, today: Optional[date] = None) -> int:
        """
        Age in whole years as ``current year - birth year``.

        Birthdays later in the year are not taken into account, so a player
        born 2000-12-31 is 24 on 2024-01-01.
        """
        today = today or utc_today()
        return today.year - self.date_of_birth.year

    def has_active_contract(self, today: Optional[date] = None) -> bool:
        """True if the contract expiry date is set and strictly after today."""
        if self.contract_expires is None:
            return False
        return self.contract_expires > (today or utc_today())

    def add_position(self, position: "Position") -> None:
        """Add a position; ``position.players`` is updated through back_populates."""
        self.positions.add(position)

    def remove_position(self, position: "Position") -> None:
        """Remove a position from both sides; no-op if not held."""
        self.positions.discard(position)

    def __repr__(self) -> str:
        return f"<Player id={self.id} full_name={self.full_name!r}>"


# =============================================================================
# STATS (owned by Player)
# =============================================================================

class PlayerSeasonStats(Base):
    """A player's statistics for one season in one league."""
    __tablename__ = "player_season_stats"

    id = Column(IdType, primary_key=True, autoincrement=True)
    player_id = Column(IdType, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    season_id = Column(BigInteger, nullable=True, index=True)  # seasons.id, not enforced
    league_id = Column(BigInteger, nullable=True, index=True)  # leagues.id, not enforced

    player = relationship("Player", back_populates="season_stats")

    def __repr__(self) -> str:
        return (f"<PlayerSeasonStats id={self.id} player_id={self.player_id} "
                f"season_id={self.season_id} league_id={self.league_id}>")


class PlayerMatchdayStats(Base):
    """A player's statistics for one matchday."""
    __tablename__ = "player_matchday_stats"

    id = Column(IdType, primary_key=True, autoincrement=True)
    player_id = Column(IdType, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    matchday_id = Column(BigInteger, nullable=True, index=True)

    player = relationship("Player", back_populates="matchday_stats")

    def __repr__(self) -> str:
        return f"<PlayerMatchdayStats id={self.id} player_id={self.player_id} matchday_id={self.matchday_id}>"
