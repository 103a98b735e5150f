"""UTC datetime helpers.

Stored and returned dates are timezone-aware UTC. SQLite hands back naive
values, so repositories pass every date through ensure_utc on the way out.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def utc_midnight(year: int, month: int, day: int) -> datetime:
    """Aware UTC datetime at 00:00 of the given calendar day (month is 1-based).

    Raises ValueError or TypeError when the parts are not a calendar date.
    """
    return datetime(year, month, day, tzinfo=UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Return dt as aware UTC: naive values are taken as UTC, aware ones converted."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
