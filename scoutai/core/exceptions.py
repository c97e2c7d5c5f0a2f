"""
Exception hierarchy for the data layer.

Referential failures (a stats row pointing at a missing player) are not
wrapped: they surface as ``sqlalchemy.exc.IntegrityError``.
"""
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from scoutai.services.validation import Violation


class ScoutDataError(Exception):
    """Base class for errors raised by the scouting data layer."""


class EntityValidationError(ScoutDataError):
    """One or more fields failed validation before the write reached storage."""

    def __init__(self, entity: str, violations: List["Violation"]):
        self.entity = entity
        self.violations = list(violations)
        details = "; ".join(
            f"{v.field}: {v.message} ({v.rule})" for v in self.violations
        )
        super().__init__(f"Invalid {entity}: {details}")

    @property
    def fields(self) -> List[str]:
        """Names of the offending fields, in the order they were reported."""
        return [v.field for v in self.violations]


class UniquenessConflictError(ScoutDataError):
    """A unique constraint (name, fbref_id, transfermarkt_id, ...) was violated."""

    def __init__(self, entity: str, detail: str = ""):
        self.entity = entity
        self.detail = detail
        message = f"Duplicate {entity}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
