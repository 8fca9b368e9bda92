"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

import math
from datetime import UTC, datetime

_SECONDS_PER_DAY = 86_400


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def days_until(target: datetime, now: datetime) -> int:
    """
    Whole days from now until target, rounded up.

    An event 2 days and 1 hour away is 3 days away; one 30 minutes away
    is 1 day away. Past targets give 0 or a negative number.
    """
    delta = ensure_utc(target) - ensure_utc(now)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)
