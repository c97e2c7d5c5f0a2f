"""Tests for configuration, database helpers, logging and error types."""
import io
import json
import logging

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from scoutai.core.exceptions import EntityValidationError, UniquenessConflictError
from scoutai.services.validation import Violation


class TestSettings:

    def test_production_requires_real_database_url(self):
        from scoutai.core.config import Settings, DEFAULT_DATABASE_URL

        settings = Settings(ENVIRONMENT="production", DATABASE_URL=DEFAULT_DATABASE_URL)

        assert settings.validate_required_secrets() == ["DATABASE_URL"]

    def test_production_with_database_url_is_complete(self):
        from scoutai.core.config import Settings

        settings = Settings(
            ENVIRONMENT="production",
            DATABASE_URL="postgresql://scout:secret@db:5432/scoutai",
        )

        assert settings.validate_required_secrets() == []
        assert settings.is_production() is True

    def test_development_default_is_accepted(self):
        from scoutai.core.config import Settings

        assert Settings(ENVIRONMENT="development").validate_required_secrets() == []

    def test_sqlite_detection(self):
        from scoutai.core.config import Settings

        assert Settings(DATABASE_URL="sqlite:///./scoutai.db").is_sqlite() is True
        assert Settings(DATABASE_URL="postgresql://localhost/scoutai").is_sqlite() is False


class TestDatabase:

    def test_sqlite_engine_enforces_foreign_keys(self):
        from scoutai.core.database import build_engine

        engine = build_engine("sqlite://")
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
        engine.dispose()

    def test_init_db_creates_all_tables(self):
        from sqlalchemy import inspect
        from scoutai.core.database import build_engine, init_db

        engine = build_engine("sqlite://")
        init_db(engine)

        assert set(inspect(engine).get_table_names()) == {
            "leagues",
            "teams",
            "seasons",
            "positions",
            "players",
            "player_positions",
            "player_season_stats",
            "player_matchday_stats",
        }
        engine.dispose()

    @pytest.fixture
    def app_session_factory(self, db_engine, monkeypatch):
        import scoutai.core.database as database

        factory = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
        monkeypatch.setattr(database, "_engine", db_engine)
        monkeypatch.setattr(database, "_SessionLocal", factory)
        return factory

    def test_session_scope_commits(self, app_session_factory):
        from scoutai.core.database import session_scope
        from scoutai.repositories import SeasonRepository

        with session_scope() as db:
            SeasonRepository(db).create(name="2024/25", start_year=2024, end_year=2025)

        check = app_session_factory()
        assert SeasonRepository(check).count() == 1
        check.close()

    def test_session_scope_rolls_back_on_error(self, app_session_factory):
        from scoutai.core.database import session_scope
        from scoutai.repositories import SeasonRepository

        with pytest.raises(RuntimeError):
            with session_scope() as db:
                SeasonRepository(db).create(name="2024/25", start_year=2024, end_year=2025)
                raise RuntimeError("abort")

        check = app_session_factory()
        assert SeasonRepository(check).count() == 0
        check.close()

    def test_get_db_yields_session(self, app_session_factory):
        from scoutai.core.database import get_db

        generator = get_db()
        db = next(generator)
        assert db.bind is not None
        generator.close()

    def test_sessions_do_not_autoflush(self, db_session, app_session_factory):
        from scoutai.core.database import get_session_factory

        assert db_session.autoflush is False
        assert get_session_factory().kw["autoflush"] is False

    def test_repository_registers_flush_listener(self, db_session):
        from sqlalchemy import event
        from scoutai.repositories import LeagueRepository, PlayerRepository
        from scoutai.repositories.base import check_pending_writes

        LeagueRepository(db_session)
        PlayerRepository(db_session)

        assert event.contains(db_session, "before_flush", check_pending_writes)


class TestLogging:

    def test_json_formatter_includes_extra_fields(self):
        from scoutai.core.logging import JSONFormatter

        record = logging.LogRecord(
            "scoutai.repositories", logging.INFO, __file__, 10,
            "Deleted player %s", (7,), None,
        )
        record.player_id = 7

        payload = json.loads(JSONFormatter().format(record))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "scoutai.repositories"
        assert payload["message"] == "Deleted player 7"
        assert payload["extra"] == {"player_id": 7}

    def test_configure_logging_uses_given_handler(self):
        from scoutai.core.logging import configure_logging, get_logger

        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        stream = io.StringIO()
        try:
            configure_logging(level="DEBUG", json_output=True, handler=logging.StreamHandler(stream))
            get_logger("scoutai.test").debug("hello")
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        assert json.loads(stream.getvalue())["message"] == "hello"

    def test_colored_formatter(self):
        from scoutai.core.logging import ColoredFormatter

        record = logging.LogRecord("scoutai", logging.WARNING, __file__, 1, "careful", (), None)
        output = ColoredFormatter().format(record)

        assert "[WARNING]" in output
        assert "scoutai: careful" in output


class TestExceptions:

    def test_validation_error_lists_fields(self):
        error = EntityValidationError("Player", [
            Violation("height_cm", "max", "Height cannot exceed 220cm"),
            Violation("foot", "pattern", "Foot must be 'left', 'right', or 'both'"),
        ])

        assert error.fields == ["height_cm", "foot"]
        assert str(error).startswith("Invalid Player: height_cm: Height cannot exceed 220cm (max)")

    def test_uniqueness_conflict_message(self):
        error = UniquenessConflictError("League", "UNIQUE constraint failed: leagues.name")
        assert str(error) == "Duplicate League: UNIQUE constraint failed: leagues.name"

    def test_unique_violation_detection(self):
        from scoutai.repositories.base import is_unique_violation

        unique = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: leagues.name"))
        foreign = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

        assert is_unique_violation(unique) is True
        assert is_unique_violation(foreign) is False
