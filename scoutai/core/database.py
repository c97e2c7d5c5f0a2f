"""
Database configuration and session management.
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from scoutai.core.logging import get_logger

logger = get_logger(__name__)

# Engine and session factory are created on first use so that importing the
# package never requires a database driver.
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE and FK checks unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False, **pool_options) -> Engine:
    """
    Create an engine for the given URL.

    SQLite engines get foreign key enforcement switched on for every
    connection; other backends get connection pooling options.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        echo=echo,
        **pool_options,
    )


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine, _SessionLocal

    if _engine is None:
        from scoutai.core.config import settings
        _engine = build_engine(
            settings.DATABASE_URL,
            echo=settings.SQL_ECHO,
            **({} if settings.is_sqlite() else {
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
            }),
        )
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
        logger.info(f"Database engine created for {_engine.url.render_as_string(hide_password=True)}")

    return _engine


def get_session_factory() -> sessionmaker:
    """Get the session factory bound to the application engine."""
    get_engine()
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage:
        for db in get_db():
            repo = PlayerRepository(db)
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Commits on success, rolls back on any exception and re-raises it.
    """
    db = get_session_factory()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(engine: Optional[Engine] = None) -> None:
    """Initialize database tables."""
    from scoutai.models import Base
    # checkfirst=True will only create tables that don't exist
    Base.metadata.create_all(bind=engine or get_engine(), checkfirst=True)


def drop_db(engine: Optional[Engine] = None) -> None:
    """Drop all tables managed by the models."""
    from scoutai.models import Base
    Base.metadata.drop_all(bind=engine or get_engine())
