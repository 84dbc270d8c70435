from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.hr_attendance.hr_attendance.attendance.service import AttendanceService
from src.hr_attendance.hr_attendance.core.actor import Actor
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus, DayState, Role
from src.hr_attendance.hr_attendance.core.exceptions import (
    AuthorizationError,
    ConflictError,
    DayOnLeaveError,
    StateError,
    ValidationError,
)

UTC = timezone.utc


def test_check_in_then_out_records_present_day(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)

    svc.check_in(employee_actor, now=datetime(2024, 3, 4, 9, 0, tzinfo=UTC), tz=UTC)
    rec = svc.check_out(employee_actor, now=datetime(2024, 3, 4, 17, 30, tzinfo=UTC), tz=UTC)

    assert rec.work_date == date(2024, 3, 4)
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.work_hours == pytest.approx(8.5)


def test_second_check_in_fails_and_keeps_first_time(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)
    first = datetime(2024, 3, 4, 9, 0, tzinfo=UTC)
    svc.check_in(employee_actor, now=first, tz=UTC)

    with pytest.raises(ConflictError):
        svc.check_in(employee_actor, now=datetime(2024, 3, 4, 9, 5, tzinfo=UTC), tz=UTC)

    rec = attendance_repo.get_for_employee_and_date(1, date(2024, 3, 4))
    assert rec.check_in_time == first


def test_check_out_before_check_in_creates_no_record(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)

    with pytest.raises(StateError):
        svc.check_out(employee_actor, now=datetime(2024, 3, 4, 17, 0, tzinfo=UTC), tz=UTC)

    assert attendance_repo.count() == 0


def test_work_day_follows_callers_time_zone(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)
    # 23:30 UTC on March 3rd is already March 4th in Ho Chi Minh City (UTC+7).
    now = datetime(2024, 3, 3, 23, 30, tzinfo=UTC)

    rec = svc.check_in(employee_actor, now=now, tz=ZoneInfo("Asia/Ho_Chi_Minh"))

    assert rec.work_date == date(2024, 3, 4)
    assert attendance_repo.get_for_employee_and_date(1, date(2024, 3, 3)) is None


def test_naive_now_is_rejected(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)

    with pytest.raises(ValidationError):
        svc.check_in(employee_actor, now=datetime(2024, 3, 4, 9, 0), tz=UTC)


def test_leave_day_is_terminal(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)
    attendance_repo.mark_leave(employee_id=1, work_date=date(2024, 3, 4))

    with pytest.raises(DayOnLeaveError):
        svc.check_in(employee_actor, now=datetime(2024, 3, 4, 9, 0, tzinfo=UTC), tz=UTC)

    rec = attendance_repo.get_for_employee_and_date(1, date(2024, 3, 4))
    assert rec.status == AttendanceStatus.ON_LEAVE
    assert rec.check_in_time is None


def test_today_reads_persisted_state(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)
    morning = datetime(2024, 3, 4, 8, 0, tzinfo=UTC)

    assert svc.today(employee_actor, now=morning, tz=UTC).state == DayState.NOT_STARTED

    svc.check_in(employee_actor, now=morning, tz=UTC)
    today = svc.today(employee_actor, now=datetime(2024, 3, 4, 12, 0, tzinfo=UTC), tz=UTC)

    assert today.state == DayState.CHECKED_IN
    assert today.record is not None
    assert today.record.check_in_time == morning


def test_materialize_absences_requires_hr(attendance_repo, directory, employee_actor):
    svc = AttendanceService(attendance_repo, directory)

    with pytest.raises(AuthorizationError):
        svc.materialize_absences(employee_actor, date(2024, 3, 4))


def test_materialize_absences_skips_existing_rows(attendance_repo, directory, hr_actor):
    svc = AttendanceService(attendance_repo, directory)
    attendance_repo.upsert_check_in(employee_id=1, work_date=date(2024, 3, 4), timestamp=datetime(2024, 3, 4, 9, tzinfo=UTC))

    created = svc.materialize_absences(hr_actor, date(2024, 3, 4))

    assert created == 2
    assert attendance_repo.get_for_employee_and_date(1, date(2024, 3, 4)).status == AttendanceStatus.PRESENT
    assert attendance_repo.get_for_employee_and_date(2, date(2024, 3, 4)).status == AttendanceStatus.ABSENT


def test_check_in_on_materialized_absence_becomes_present(attendance_repo, directory, hr_actor, employee_actor):
    svc = AttendanceService(attendance_repo, directory)
    svc.materialize_absences(hr_actor, date(2024, 3, 4))

    rec = svc.check_in(employee_actor, now=datetime(2024, 3, 4, 10, 0, tzinfo=UTC), tz=UTC)

    assert rec.status == AttendanceStatus.PRESENT


def test_unknown_employee_cannot_check_in_or_out(attendance_repo, directory):
    svc = AttendanceService(attendance_repo, directory)
    stranger = Actor(actor_id=404, role=Role.EMPLOYEE)
    now = datetime(2024, 3, 4, 9, 0, tzinfo=UTC)

    with pytest.raises(ValidationError):
        svc.check_in(stranger, now=now, tz=UTC)
    with pytest.raises(ValidationError):
        svc.check_out(stranger, now=now, tz=UTC)

    assert attendance_repo.count() == 0
