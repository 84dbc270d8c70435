from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    """Attendance Record Store.

    Each write validates and derives (see `engine`) as one atomic step per
    (employee, day); a rejected write leaves the stored row untouched.
    """

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert_check_in(self, *, employee_id: int, work_date: date, timestamp: datetime) -> AttendanceRecord:
        raise NotImplementedError

    def upsert_check_out(self, *, employee_id: int, work_date: date, timestamp: datetime) -> AttendanceRecord:
        raise NotImplementedError

    def mark_leave(self, *, employee_id: int, work_date: date) -> AttendanceRecord:
        raise NotImplementedError

    def mark_leave_days(self, *, employee_id: int, work_dates: Sequence[date]) -> list[AttendanceRecord]:
        """Mark several days as leave in one transaction: all or none."""

        raise NotImplementedError

    def materialize_absences(self, *, work_date: date, employee_ids: Iterable[int]) -> int:
        """Insert explicit ABSENT rows for employees with no row that day."""

        raise NotImplementedError

    def find_by_range_and_employees(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Iterable[int],
        text_query: str = "",
    ) -> Sequence[AttendanceReportRow]:
        """Rows in [start_date, end_date] for `employee_ids`, date DESC then name ASC."""

        raise NotImplementedError
