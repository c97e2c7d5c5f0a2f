"""
Clock helpers for the data layer.

Timestamps are stored as naive UTC datetimes; calendar logic (age, contract
status) uses the UTC date.
"""
from datetime import datetime, date, timezone

# UTC timezone for Python < 3.11 compatibility
try:
    from datetime import UTC
except ImportError:
    UTC = timezone.utc


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, matching the DateTime columns."""
    return datetime.now(UTC).replace(tzinfo=None)


def utc_today() -> date:
    """Current UTC calendar date."""
    return datetime.now(UTC).date()
