from __future__ import annotations

from datetime import date

from ..core.exceptions import InvalidRangeError


def require_date_range(start: date, end: date) -> None:
    if not isinstance(start, date) or not isinstance(end, date):
        raise InvalidRangeError("Start and end must be calendar dates")
    if start > end:
        raise InvalidRangeError(f"Start date {start.isoformat()} is after end date {end.isoformat()}")


def normalize_query(value: str | None) -> str:
    """Trimmed, case-folded search text ('' means no filter)."""
    return (value or "").strip().casefold()
