from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterator, Optional, Tuple
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def parse_month(value: str) -> Tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid month (expected YYYY-MM): {value!r}")
    return parsed.year, parsed.month


def now_utc() -> datetime:
    """Current aware UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def get_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError):
        raise ValidationError(f"Unknown time zone: {name!r}")


def require_aware(moment: datetime, field_name: str = "timestamp") -> datetime:
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValidationError(f"{field_name} must be timezone-aware")
    return moment


def work_date_for(moment: datetime, tz: tzinfo) -> date:
    """Calendar day a moment belongs to in the employee's time zone."""
    return require_aware(moment).astimezone(tz).date()


def to_storage(moment: Optional[datetime]) -> Optional[datetime]:
    """Aware datetime -> naive UTC for DATETIME columns."""
    if moment is None:
        return None
    return require_aware(moment).astimezone(timezone.utc).replace(tzinfo=None)


def from_storage(value: Optional[datetime]) -> Optional[datetime]:
    """Naive UTC from DATETIME columns -> aware UTC."""
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


def month_range(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Days in [start, end], inclusive, ascending."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
