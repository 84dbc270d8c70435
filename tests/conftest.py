from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, Optional

import pytest

from src.hr_attendance.hr_attendance.attendance import engine
from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord, AttendanceReportRow
from src.hr_attendance.hr_attendance.common.validators import normalize_query
from src.hr_attendance.hr_attendance.core.actor import Actor
from src.hr_attendance.hr_attendance.core.enums import Role
from src.hr_attendance.hr_attendance.employees.model import EmployeeIdentity
from src.hr_attendance.hr_attendance.reports.service import report_sort_key


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class InMemoryDirectory:
    def __init__(self, employees: Iterable[EmployeeIdentity], managed_by: Optional[dict[int, list[int]]] = None):
        self._by_id = {e.employee_id: e for e in employees}
        self._managed_by = managed_by or {}

    def get_by_id(self, employee_id: int) -> Optional[EmployeeIdentity]:
        return self._by_id.get(employee_id)

    def list_by_ids(self, employee_ids):
        return [self._by_id[i] for i in sorted(set(employee_ids)) if i in self._by_id]

    def list_ids_managed_by(self, hr_id: int):
        return list(self._managed_by.get(hr_id, []))


class InMemoryAttendance:
    """Same write discipline as the MySQL store: derive first, store only on success."""

    def __init__(self, directory: InMemoryDirectory):
        self._directory = directory
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._next_id = 1
        self.find_calls = 0
        self.leave_batches: list[list[date]] = []

    def _blank(self, employee_id: int, work_date: date) -> AttendanceRecord:
        return engine.blank_record(employee_id, work_date, record_id=self._next_id)

    def _store(self, record: AttendanceRecord) -> AttendanceRecord:
        key = (record.employee_id, record.work_date)
        if key not in self._by_key:
            self._next_id += 1
        self._by_key[key] = record
        return record

    def count(self) -> int:
        return len(self._by_key)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_key.get((employee_id, work_date))

    def upsert_check_in(self, *, employee_id, work_date, timestamp):
        current = self._by_key.get((employee_id, work_date)) or self._blank(employee_id, work_date)
        return self._store(engine.apply_check_in(current, timestamp))

    def upsert_check_out(self, *, employee_id, work_date, timestamp):
        current = self._by_key.get((employee_id, work_date))
        return self._store(engine.apply_check_out(current, timestamp))

    def mark_leave(self, *, employee_id, work_date):
        current = self._by_key.get((employee_id, work_date)) or self._blank(employee_id, work_date)
        return self._store(engine.apply_leave(current))

    def mark_leave_days(self, *, employee_id, work_dates):
        self.leave_batches.append(list(work_dates))
        return [self.mark_leave(employee_id=employee_id, work_date=d) for d in work_dates]

    def materialize_absences(self, *, work_date, employee_ids):
        created = 0
        for i in sorted(set(employee_ids)):
            if (i, work_date) not in self._by_key:
                self._store(self._blank(i, work_date))
                created += 1
        return created

    def find_by_range_and_employees(self, *, start_date, end_date, employee_ids, text_query=""):
        self.find_calls += 1
        ids = set(employee_ids)
        needle = normalize_query(text_query)
        rows = []
        for (employee_id, work_date), record in self._by_key.items():
            if employee_id not in ids or not (start_date <= work_date <= end_date):
                continue
            employee = self._directory.get_by_id(employee_id)
            if employee is None or not employee.matches(needle):
                continue
            rows.append(AttendanceReportRow(employee=employee, work_date=work_date, record=record))
        rows.sort(key=report_sort_key)
        return rows


JANE = EmployeeIdentity(employee_id=1, name="Jane Doe", email="jane@acme.test", employee_code="EMP-001")
BOB = EmployeeIdentity(employee_id=2, name="Bob Stone", email="bob@acme.test", employee_code="EMP-002")
ALICE = EmployeeIdentity(employee_id=3, name="Alice Janeway", email="alice@acme.test", employee_code="EMP-003")
OUTSIDER = EmployeeIdentity(employee_id=9, name="Jane Outsider", email="jane.o@other.test", employee_code="EMP-009")

HR_ID = 100


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory([JANE, BOB, ALICE, OUTSIDER], managed_by={HR_ID: [1, 2, 3]})


@pytest.fixture
def attendance_repo(directory) -> InMemoryAttendance:
    return InMemoryAttendance(directory)


@pytest.fixture
def hr_actor() -> Actor:
    return Actor(actor_id=HR_ID, role=Role.HR, visible_employee_ids=frozenset({1, 2, 3}))


@pytest.fixture
def employee_actor() -> Actor:
    return Actor(actor_id=1, role=Role.EMPLOYEE)
