"""Timestamp storage format and calendar-day boundaries.

Timestamps are persisted as UTC ISO-8601 strings with fixed microsecond
precision, so string order equals chronological order in SQL comparisons.
"""

from __future__ import annotations

from datetime import UTC, datetime, time
from zoneinfo import ZoneInfo


def to_storage(moment: datetime) -> str:
    """Serialize an aware datetime for storage."""
    if moment.tzinfo is None:
        msg = "Naive datetimes cannot be stored; attach a tzinfo first"
        raise ValueError(msg)
    return moment.astimezone(UTC).isoformat(timespec="microseconds")


def from_storage(raw: str) -> datetime:
    """Parse a stored timestamp back into an aware UTC datetime."""
    return datetime.fromisoformat(raw).astimezone(UTC)


def start_of_day(now: datetime, tz_name: str | None = None) -> datetime:
    """Midnight (00:00:00.000) of *now*'s calendar day, returned in UTC.

    The calendar day is taken in the zone *tz_name*, or in the server's
    local zone when *tz_name* is None.

    Examples:
        >>> start_of_day(datetime(2026, 10, 19, 15, 30, tzinfo=UTC), "UTC")
        datetime.datetime(2026, 10, 19, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if tz_name is None:
        local_day = now.astimezone().date()
        # Naive local midnight; astimezone() resolves the offset for that instant.
        midnight = datetime.combine(local_day, time.min).astimezone()
    else:
        zone = ZoneInfo(tz_name)
        local_day = now.astimezone(zone).date()
        midnight = datetime.combine(local_day, time.min, tzinfo=zone)
    return midnight.astimezone(UTC)
