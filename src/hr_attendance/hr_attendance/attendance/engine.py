"""Status & duration derivation.

Pure functions: they take a record (or nothing, for a day with no row yet) and
return a new, fully derived record, or raise without changing anything.
Stores call these inside their write transaction.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import require_aware
from ..core.constants import WORK_HOURS_DISPLAY_DECIMALS
from ..core.enums import AttendanceStatus, DayState
from ..core.exceptions import ConflictError, DayOnLeaveError, DuplicateCheckOutError, StateError
from .factory import DerivationStrategyFactory
from .model import AttendanceRecord
from .strategies.base import StatusDecision

_factory = DerivationStrategyFactory()


def derive(*, check_in: Optional[datetime], check_out: Optional[datetime], on_leave: bool = False) -> StatusDecision:
    strategy = _factory.for_day(check_in=check_in, check_out=check_out, on_leave=on_leave)
    return strategy.decide(check_in=check_in, check_out=check_out)


def rederive(record: AttendanceRecord) -> AttendanceRecord:
    decision = derive(check_in=record.check_in_time, check_out=record.check_out_time, on_leave=record.on_leave)
    return replace(record, status=decision.status, work_hours=decision.work_hours)


def blank_record(employee_id: int, work_date: date, *, record_id: int = 0) -> AttendanceRecord:
    """A freshly materialized day: no events, no leave, hence ABSENT."""
    return AttendanceRecord(
        record_id=record_id,
        employee_id=int(employee_id),
        work_date=work_date,
        check_in_time=None,
        check_out_time=None,
        status=AttendanceStatus.ABSENT,
    )


def apply_check_in(record: AttendanceRecord, timestamp: datetime) -> AttendanceRecord:
    require_aware(timestamp, "check-in time")
    if record.on_leave:
        raise DayOnLeaveError(f"{record.work_date.isoformat()} is marked as leave")
    if record.check_in_time is not None:
        raise ConflictError(f"Already checked in on {record.work_date.isoformat()}")
    return rederive(replace(record, check_in_time=timestamp))


def apply_check_out(record: Optional[AttendanceRecord], timestamp: datetime) -> AttendanceRecord:
    require_aware(timestamp, "check-out time")
    if record is None or record.check_in_time is None:
        raise StateError("Cannot check out before checking in")
    if record.on_leave:
        raise DayOnLeaveError(f"{record.work_date.isoformat()} is marked as leave")
    if record.check_out_time is not None:
        raise DuplicateCheckOutError(f"Already checked out on {record.work_date.isoformat()}")
    if timestamp < record.check_in_time:
        raise StateError("Check-out time cannot be earlier than check-in time")
    return rederive(replace(record, check_out_time=timestamp))


def apply_leave(record: AttendanceRecord) -> AttendanceRecord:
    return rederive(replace(record, on_leave=True))


def day_state(record: Optional[AttendanceRecord]) -> DayState:
    if record is None:
        return DayState.NOT_STARTED
    if record.on_leave:
        return DayState.ON_LEAVE
    if record.check_in_time is None:
        return DayState.NOT_STARTED
    if record.check_out_time is None:
        return DayState.CHECKED_IN
    return DayState.CHECKED_OUT


def format_work_hours(hours: Optional[float]) -> str:
    """Presentation rounding: 8.5166 -> '8.5h'; None -> '-'."""
    if hours is None:
        return "-"
    return f"{hours:.{WORK_HOURS_DISPLAY_DECIMALS}f}h"
