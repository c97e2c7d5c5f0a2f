"""
Base repository class for data access layer.

The repository is the only write path to storage. Every write goes through
the same steps:
1. Validate the entity (``scoutai.services.validation``)
2. Stamp timestamps (``created_at`` once at insert, ``updated_at`` on every write)
3. Flush so the database assigns identity and enforces unique constraints
4. Translate unique-constraint failures into ``UniquenessConflictError``

Steps 1 and 2 run in a ``before_flush`` listener on the repository's session, so
they also cover objects pulled in by relationship cascades and edits made
directly on loaded instances, whichever repository commits them.

Example:
    class LeagueRepository(BaseRepository[League]):
        def find_by_name(self, name: str) -> Optional[League]:
            return self.where_first(League.name == name)
"""
from abc import ABC
from typing import TypeVar, Generic, Type, Optional, List, Any, Dict

from sqlalchemy import desc, event, func, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from scoutai.core.exceptions import EntityValidationError, UniquenessConflictError
from scoutai.core.logging import get_logger
from scoutai.services.validation import VALIDATORS, ensure_valid
from scoutai.utils.timezone import utc_now

logger = get_logger(__name__)

T = TypeVar("T")

# Fields that are assigned once at insert and never changed by update()
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})

# SQLSTATE for unique_violation (PostgreSQL) and driver messages for other backends
_UNIQUE_SQLSTATE = "23505"
_UNIQUE_MESSAGES = (
    "unique constraint failed",  # SQLite
    "duplicate key value",       # PostgreSQL
    "duplicate entry",           # MySQL
)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Check whether an IntegrityError was caused by a unique constraint."""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate == _UNIQUE_SQLSTATE:
        return True
    message = str(orig).lower()
    return any(marker in message for marker in _UNIQUE_MESSAGES)


def check_pending_writes(session: Session, flush_context, instances) -> None:
    """
    ``before_flush`` listener that validates and stamps every entity about to be written.

    New entities get ``created_at`` and ``updated_at`` set to the same instant.
    Modified entities are validated and get ``updated_at`` refreshed; a changed
    ``created_at`` is reverted to the stored value and rejected.

    Raises:
        EntityValidationError: a new or modified entity failed validation
        ValueError: ``created_at`` was assigned on a stored entity
    """
    now = utc_now()

    for obj in session.new:
        if type(obj) not in VALIDATORS:
            continue
        ensure_valid(obj)
        if hasattr(obj, "created_at"):
            obj.created_at = now
        if hasattr(obj, "updated_at"):
            obj.updated_at = now

    for obj in session.dirty:
        if type(obj) not in VALIDATORS or not session.is_modified(obj):
            continue
        if hasattr(obj, "created_at") and inspect(obj).attrs.created_at.history.has_changes():
            session.expire(obj, ["created_at"])
            raise ValueError(f"{type(obj).__name__}.created_at cannot be changed")
        ensure_valid(obj)
        if hasattr(obj, "updated_at"):
            obj.updated_at = now


class BaseRepository(Generic[T], ABC):
    """
    Base repository class providing common data access methods.

    All repositories should extend this class and specify their model type.

    Attributes:
        model_type: The SQLAlchemy model class this repository manages
        db: The database session
    """

    def __init__(self, model_type: Type[T], db: Session):
        """
        Initialize the repository.

        Args:
            model_type: The SQLAlchemy model class
            db: The database session
        """
        self.model_type = model_type
        self.db = db
        if not event.contains(db, "before_flush", check_pending_writes):
            event.listen(db, "before_flush", check_pending_writes)

    @property
    def entity_name(self) -> str:
        return self.model_type.__name__

    # ========================================================================
    # CRUD Operations - Basic Create, Read, Update, Delete
    # ========================================================================

    def find_by_id(self, id: int) -> Optional[T]:
        """Find a single record by ID."""
        return self.db.query(self.model_type).filter(self.model_type.id == id).first()

    def find_all(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Optional[str] = None
    ) -> List[T]:
        """
        Find all records with optional pagination.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            order_by: Column name to order by (prefix with '-' for descending)

        Returns:
            List of records
        """
        query = self.db.query(self.model_type)

        if order_by:
            if order_by.startswith('-'):
                column = getattr(self.model_type, order_by[1:])
                query = query.order_by(desc(column))
            else:
                column = getattr(self.model_type, order_by)
                query = query.order_by(column)

        if offset is not None:
            query = query.offset(offset)

        if limit is not None:
            query = query.limit(limit)

        return query.all()

    def create(self, **kwargs) -> T:
        """
        Build, validate and insert a new record.

        Returns:
            The created record with its generated id (flushed, not committed)

        Raises:
            EntityValidationError: a field failed validation; nothing was written
            UniquenessConflictError: a unique column already holds this value
        """
        return self.add(self.model_type(**kwargs))

    def add(self, instance: T) -> T:
        """
        Validate and insert an already-built instance.

        Timestamps are stamped at flush, and only for instances not yet
        stored, so adding a persistent instance leaves ``created_at`` alone.
        If a related object pulled in by cascade fails validation the
        instance stays pending; roll the session back.
        """
        ensure_valid(instance)
        self.db.add(instance)
        self.flush()
        logger.debug(f"Created {self.entity_name} id={instance.id}")
        return instance

    def create_many(self, items: List[Dict[str, Any]]) -> List[T]:
        """
        Create multiple records.

        Every record is validated before any of them is added.
        """
        instances = [self.model_type(**item) for item in items]
        for instance in instances:
            ensure_valid(instance)

        self.db.add_all(instances)
        self.flush()
        return instances

    def update(self, id: int, **kwargs) -> Optional[T]:
        """
        Update a record by ID.

        Returns:
            The updated record, or None if not found

        Raises:
            ValueError: unknown or immutable field name
            EntityValidationError: the new values failed validation; the
                record is reloaded from the database before raising
        """
        for key in kwargs:
            if key in IMMUTABLE_FIELDS:
                raise ValueError(f"{self.entity_name}.{key} cannot be updated")
            if key not in inspect(self.model_type).attrs:
                raise ValueError(f"{self.entity_name} has no field '{key}'")

        instance = self.find_by_id(id)
        if instance is None:
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)

        try:
            ensure_valid(instance)
        except EntityValidationError:
            self.db.refresh(instance)
            raise

        self.touch(instance)
        self.flush()
        return instance

    def delete(self, id: int) -> bool:
        """
        Delete a record by ID.

        Returns:
            True if deleted, False if not found
        """
        instance = self.find_by_id(id)
        if instance is None:
            return False
        self.db.delete(instance)
        self.flush()
        logger.debug(f"Deleted {self.entity_name} id={id}")
        return True

    def touch(self, instance: T) -> None:
        """Refresh ``updated_at`` on models that track it."""
        if hasattr(instance, "updated_at"):
            instance.updated_at = utc_now()

    # ========================================================================
    # Query Builders - Flexible query construction
    # ========================================================================

    def query(self) -> Query:
        """Get a new query object for this model."""
        return self.db.query(self.model_type)

    def filter_by(self, **kwargs) -> List[T]:
        """Filter records by keyword arguments."""
        return self.db.query(self.model_type).filter_by(**kwargs).all()

    def filter_by_first(self, **kwargs) -> Optional[T]:
        """Filter records by keyword arguments and return first match."""
        return self.db.query(self.model_type).filter_by(**kwargs).first()

    def where(self, *criterion) -> List[T]:
        """Filter records using SQLAlchemy expressions."""
        return self.db.query(self.model_type).filter(*criterion).all()

    def where_first(self, *criterion) -> Optional[T]:
        """Filter records using SQLAlchemy expressions and return first match."""
        return self.db.query(self.model_type).filter(*criterion).first()

    # ========================================================================
    # Existence Checks
    # ========================================================================

    def exists(self, id: int) -> bool:
        """Check if a record with given ID exists."""
        return self.db.query(
            self.db.query(self.model_type).filter(self.model_type.id == id).exists()
        ).scalar()

    def exists_where(self, *criterion) -> bool:
        """Check if any record matching the criterion exists."""
        return self.db.query(
            self.db.query(self.model_type).filter(*criterion).exists()
        ).scalar()

    def count(self, *criterion) -> int:
        """Count records matching optional criterion."""
        query = self.db.query(func.count(self.model_type.id))
        if criterion:
            query = query.filter(*criterion)
        return query.scalar() or 0

    # ========================================================================
    # Save Operations
    # ========================================================================

    def flush(self) -> None:
        """
        Flush pending changes without committing.

        On an integrity failure the session is rolled back. Unique violations
        are raised as UniquenessConflictError; anything else (foreign keys,
        NOT NULL) propagates unchanged.
        """
        try:
            self.db.flush()
        except IntegrityError as exc:
            self._handle_integrity_error(exc)

    def save(self) -> None:
        """
        Commit pending changes to the database.

        Every modified entity in the session is validated and gets
        ``updated_at`` refreshed, whatever its type.
        """
        try:
            self.db.commit()
        except IntegrityError as exc:
            self._handle_integrity_error(exc)

    def refresh(self, instance: T) -> T:
        """Refresh an instance from the database."""
        self.db.refresh(instance)
        return instance

    def rollback(self) -> None:
        """Rollback pending changes."""
        self.db.rollback()

    def _handle_integrity_error(self, exc: IntegrityError) -> None:
        self.db.rollback()
        if is_unique_violation(exc):
            logger.warning(
                f"Unique constraint violated for {self.entity_name}",
                extra={"entity": self.entity_name, "detail": str(exc.orig)},
            )
            raise UniquenessConflictError(self.entity_name, str(exc.orig)) from exc
        raise exc
