from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.hr_attendance.hr_attendance.attendance import engine
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus, DayState
from src.hr_attendance.hr_attendance.core.exceptions import (
    ConflictError,
    DayOnLeaveError,
    StateError,
    ValidationError,
)

DAY = date(2024, 3, 4)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2024, 3, 4, hour, minute, second, tzinfo=timezone.utc)


def test_nine_to_half_past_five_is_eight_and_a_half_hours():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))
    rec = engine.apply_check_out(rec, at(17, 30))

    assert rec.status == AttendanceStatus.PRESENT
    assert rec.work_hours == pytest.approx(8.5)


@pytest.mark.parametrize(
    "check_in, check_out",
    [
        (at(8), at(8, 0, 1)),
        (at(0), at(23, 59, 59)),
        (at(9, 15), at(12, 47, 13)),
    ],
)
def test_work_hours_is_exact_difference(check_in, check_out):
    decision = engine.derive(check_in=check_in, check_out=check_out)

    assert decision.status == AttendanceStatus.PRESENT
    assert decision.work_hours == pytest.approx((check_out - check_in).total_seconds() / 3600)


def test_stored_hours_keep_full_precision():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))
    rec = engine.apply_check_out(rec, at(17, 31))

    assert rec.work_hours == pytest.approx(8 + 31 / 60)
    assert engine.format_work_hours(rec.work_hours) == "8.5h"


def test_equal_check_in_and_out_is_zero_hours():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))
    rec = engine.apply_check_out(rec, at(9))

    assert rec.status == AttendanceStatus.PRESENT
    assert rec.work_hours == 0


def test_no_check_in_is_absent():
    decision = engine.derive(check_in=None, check_out=None)

    assert decision.status == AttendanceStatus.ABSENT
    assert decision.work_hours is None


def test_open_day_is_present_without_hours():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))

    assert rec.status == AttendanceStatus.PRESENT
    assert rec.work_hours is None
    assert engine.day_state(rec) == DayState.CHECKED_IN


def test_leave_overrides_completed_day_but_keeps_times():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))
    rec = engine.apply_check_out(rec, at(17))
    rec = engine.apply_leave(rec)

    assert rec.status == AttendanceStatus.ON_LEAVE
    assert rec.work_hours is None
    assert rec.check_in_time == at(9)
    assert rec.check_out_time == at(17)


def test_second_check_in_conflicts():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))

    with pytest.raises(ConflictError):
        engine.apply_check_in(rec, at(10))


def test_check_out_without_record_is_state_error():
    with pytest.raises(StateError):
        engine.apply_check_out(None, at(17))


def test_check_out_on_absent_record_is_state_error():
    with pytest.raises(StateError):
        engine.apply_check_out(engine.blank_record(1, DAY), at(17))


def test_second_check_out_is_conflict_and_state_error():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))
    rec = engine.apply_check_out(rec, at(17))

    with pytest.raises(ConflictError) as exc:
        engine.apply_check_out(rec, at(18))
    assert isinstance(exc.value, StateError)


def test_check_out_before_check_in_time_is_rejected():
    rec = engine.apply_check_in(engine.blank_record(1, DAY), at(9))

    with pytest.raises(StateError):
        engine.apply_check_out(rec, at(9) - timedelta(seconds=1))


def test_check_in_on_leave_day_is_rejected():
    rec = engine.apply_leave(engine.blank_record(1, DAY))

    with pytest.raises(DayOnLeaveError):
        engine.apply_check_in(rec, at(9))


def test_naive_timestamp_is_rejected():
    with pytest.raises(ValidationError):
        engine.apply_check_in(engine.blank_record(1, DAY), datetime(2024, 3, 4, 9, 0))


def test_day_state_transitions():
    assert engine.day_state(None) == DayState.NOT_STARTED
    assert engine.day_state(engine.blank_record(1, DAY)) == DayState.NOT_STARTED

    rec = engine.apply_check_out(engine.apply_check_in(engine.blank_record(1, DAY), at(9)), at(17))
    assert engine.day_state(rec) == DayState.CHECKED_OUT
    assert engine.day_state(engine.apply_leave(rec)) == DayState.ON_LEAVE


def test_format_work_hours_missing():
    assert engine.format_work_hours(None) == "-"
    assert engine.format_work_hours(0.0) == "0.0h"
