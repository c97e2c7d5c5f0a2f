"""
Services for the scouting data layer.
"""
from scoutai.services.validation import (
    Violation,
    ValidationResult,
    validate_entity,
    ensure_valid,
)

__all__ = [
    "Violation",
    "ValidationResult",
    "validate_entity",
    "ensure_valid",
]
