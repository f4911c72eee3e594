from __future__ import annotations

from datetime import date, datetime, time
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError

Clock = Callable[[], datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time: {value!r} (expected HH:MM)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def make_clock(tz_name: Optional[str] = None) -> Clock:
    """Build the clock used to derive day keys and timestamps.

    With a timezone the wall-clock time of that zone is returned naive, so the
    stored values and the day key agree with what the zone's users see.
    """
    if not tz_name:
        return now_local

    try:
        tz = ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        raise ValueError(f"Unknown timezone: {tz_name!r}")

    def _clock() -> datetime:
        return datetime.now(tz).replace(tzinfo=None)

    return _clock


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so values match what DATETIME(3) stores."""
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)
