from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from ..access.policy import restrict_scope
from ..attendance.engine import format_work_hours
from ..attendance.model import AttendanceReportRow
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days
from ..common.validators import normalize_query, require_date_range
from ..core.actor import Actor
from ..core.constants import DEFAULT_READ_RETRY_ATTEMPTS, MAX_GAP_FILL_DAYS, READ_RETRY_BACKOFF_SECONDS
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidRangeError, StoreUnavailableError
from ..employees.repository import EmployeeDirectory

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class EmployeeSummary:
    employee_id: int
    name: str
    email: str
    present_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
    unrecorded_days: int = 0
    total_work_hours: float = 0.0


def report_sort_key(row: AttendanceReportRow):
    """Date descending, then employee name ascending, then id for stability."""
    return (-row.work_date.toordinal(), row.employee.name.casefold(), row.employee.employee_id)


class AttendanceQueryService:
    """HR reporting over the attendance store. Read-only."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        directory: EmployeeDirectory,
        *,
        read_retry_attempts: int = DEFAULT_READ_RETRY_ATTEMPTS,
        retry_backoff_seconds: float = READ_RETRY_BACKOFF_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._attendance = attendance
        self._directory = directory
        self._attempts = max(1, int(read_retry_attempts))
        self._backoff = float(retry_backoff_seconds)
        self._sleep = sleep

    def _read(self, fn: Callable[[], T]) -> T:
        attempt = 1
        while True:
            try:
                return fn()
            except StoreUnavailableError:
                if attempt >= self._attempts:
                    raise
                logger.warning("Store read failed (attempt %s/%s), retrying", attempt, self._attempts)
                self._sleep(self._backoff * attempt)
                attempt += 1

    def query_attendance(
        self,
        actor: Actor,
        start_date: date,
        end_date: date,
        text_query: str = "",
        *,
        employee_ids: Optional[Iterable[int]] = None,
        fill_gaps: bool = False,
    ) -> list[AttendanceReportRow]:
        """Records for the actor's scope in [start_date, end_date], newest day first.

        With `fill_gaps`, every (employee, day) without a stored record is added
        as a non-materialized row reported as ABSENT. Without it, only stored
        records are returned.
        """
        scope = restrict_scope(actor, employee_ids)
        require_date_range(start_date, end_date)
        if fill_gaps and (end_date - start_date).days + 1 > MAX_GAP_FILL_DAYS:
            raise InvalidRangeError(f"Gap filling is limited to {MAX_GAP_FILL_DAYS} days")

        rows = self._read(
            lambda: self._attendance.find_by_range_and_employees(
                start_date=start_date,
                end_date=end_date,
                employee_ids=scope,
                text_query=text_query,
            )
        )
        out = [r for r in rows if r.employee.employee_id in scope]

        if fill_gaps:
            out.extend(self._gap_rows(scope, start_date, end_date, text_query, out))

        out.sort(key=report_sort_key)
        logger.debug(
            "HR query actor=%s range=%s..%s q=%r fill_gaps=%s -> %s rows",
            actor.actor_id, start_date.isoformat(), end_date.isoformat(), text_query, fill_gaps, len(out),
        )
        return out

    def _gap_rows(
        self,
        scope: Iterable[int],
        start_date: date,
        end_date: date,
        text_query: str,
        existing: Sequence[AttendanceReportRow],
    ) -> list[AttendanceReportRow]:
        needle = normalize_query(text_query)
        employees = [e for e in self._read(lambda: self._directory.list_by_ids(scope)) if e.matches(needle)]
        recorded = {(r.employee.employee_id, r.work_date) for r in existing}
        return [
            AttendanceReportRow(employee=emp, work_date=day)
            for emp in employees
            for day in iter_days(start_date, end_date)
            if (emp.employee_id, day) not in recorded
        ]

    @staticmethod
    def summarize(rows: Iterable[AttendanceReportRow]) -> list[EmployeeSummary]:
        """Per-employee totals for a query result, ordered by name."""
        totals: dict[int, dict] = {}
        for r in rows:
            s = totals.get(r.employee.employee_id)
            if s is None:
                s = {
                    "employee_id": r.employee.employee_id,
                    "name": r.employee.name,
                    "email": r.employee.email,
                    "present_days": 0,
                    "absent_days": 0,
                    "leave_days": 0,
                    "unrecorded_days": 0,
                    "total_work_hours": 0.0,
                }
                totals[r.employee.employee_id] = s

            if not r.is_materialized:
                s["unrecorded_days"] += 1
            elif r.status == AttendanceStatus.PRESENT:
                s["present_days"] += 1
            elif r.status == AttendanceStatus.ON_LEAVE:
                s["leave_days"] += 1
            else:
                s["absent_days"] += 1

            if r.work_hours is not None and r.status == AttendanceStatus.PRESENT:
                s["total_work_hours"] += r.work_hours

        summary = [EmployeeSummary(**s) for s in totals.values()]
        summary.sort(key=lambda x: (x.name.casefold(), x.employee_id))
        return summary

    @staticmethod
    def to_ui(row: AttendanceReportRow, *, tz: tzinfo) -> dict:
        status = row.status
        css = {
            AttendanceStatus.PRESENT: "bg-success",
            AttendanceStatus.ABSENT: "bg-danger",
            AttendanceStatus.ON_LEAVE: "bg-info",
        }.get(status, "bg-secondary")

        return {
            "id": row.record.record_id if row.record else None,
            "date": row.work_date.strftime("%Y-%m-%d"),
            "check_in": row.check_in_time.astimezone(tz).strftime("%H:%M") if row.check_in_time else "-",
            "check_out": row.check_out_time.astimezone(tz).strftime("%H:%M") if row.check_out_time else "-",
            "work_hours": format_work_hours(row.work_hours),
            "status": status.value,
            "css_class": css,
            "materialized": row.is_materialized,
            "employee": {
                "id": row.employee.employee_id,
                "name": row.employee.name,
                "email": row.employee.email,
                "image": row.employee.avatar_ref,
            },
        }
