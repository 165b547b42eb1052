from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Optional, Tuple

from ..core.constants import BUSINESS_TZ_NAME, BUSINESS_UTC_OFFSET

# Single point of truth for the business timezone. Swapping in
# zoneinfo.ZoneInfo(BUSINESS_TZ_NAME) here is enough to pick up tz database rules.
BUSINESS_TZ = timezone(BUSINESS_UTC_OFFSET, BUSINESS_TZ_NAME)

_WALL_CLOCK_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_wall_clock(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into a naive time.

    Raises ValueError for anything else (including 24:00).
    """
    m = _WALL_CLOCK_RE.match((value or "").strip())
    if not m:
        raise ValueError(f"Invalid wall clock time: {value!r}")
    return time(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))


def format_wall_clock(value: Optional[time]) -> Optional[str]:
    if value is None:
        return None
    if value.second:
        return value.strftime("%H:%M:%S")
    return value.strftime("%H:%M")


def to_utc_instant(day: date, wall_clock: time) -> datetime:
    """Interpret (day, wall_clock) in the business timezone and return an aware UTC instant.

    Does not look at the host machine's timezone. Raises ValueError when the
    instant falls outside the representable datetime range.
    """
    local = datetime.combine(day, wall_clock.replace(tzinfo=None), tzinfo=BUSINESS_TZ)
    try:
        return local.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"{day.isoformat()} {wall_clock.isoformat()} is out of range") from e


def to_local_display(instant: datetime) -> Tuple[date, time]:
    """Inverse of to_utc_instant. Naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    local = instant.astimezone(BUSINESS_TZ)
    return local.date(), local.time().replace(tzinfo=None)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive DATETIME read back from MySQL."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    """MySQL DATETIME has no zone; store instants as naive UTC."""
    return as_utc(value).replace(tzinfo=None)


def format_instant(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def now_utc() -> datetime:
    """Current time as an aware UTC datetime.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc)


def now_local(now: Optional[datetime] = None) -> datetime:
    """Current business-local time (aware)."""
    return (as_utc(now) if now is not None else now_utc()).astimezone(BUSINESS_TZ)


def today_local(now: Optional[datetime] = None) -> date:
    return now_local(now).date()
