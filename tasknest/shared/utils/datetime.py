"""
UTC datetime utilities for consistent timezone handling.

All timestamps in the system are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12

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

    Use at store boundaries to normalize datetimes read back from a backend.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime (e.g. SQLite) - assume it's UTC
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def advance_timestamp(previous: datetime | None, now: datetime) -> datetime:
    """
    Return now, or just after previous when the clock has not moved past it.

    Keeps updated_at strictly increasing across mutations even when two
    writes land within the clock's resolution.

    Args:
        previous: Last recorded timestamp (None on first write)
        now: Current time

    Returns:
        UTC-aware datetime strictly greater than previous
    """
    if previous is None or now > previous:
        return now
    return previous + timedelta(microseconds=1)
