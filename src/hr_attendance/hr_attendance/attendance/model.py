from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..employees.model import EmployeeIdentity


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    `status` and `work_hours` are derived by the engine; nothing else writes them.
    """

    record_id: int
    employee_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    work_hours: Optional[float] = None
    on_leave: bool = False


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for HR queries: a day joined with the employee's identity.

    `record` is None for a gap-filled day that has no stored record.
    """

    employee: EmployeeIdentity
    work_date: date
    record: Optional[AttendanceRecord] = None

    @property
    def is_materialized(self) -> bool:
        return self.record is not None

    @property
    def status(self) -> AttendanceStatus:
        if self.record is None:
            return AttendanceStatus.ABSENT
        return self.record.status

    @property
    def check_in_time(self) -> Optional[datetime]:
        return self.record.check_in_time if self.record else None

    @property
    def check_out_time(self) -> Optional[datetime]:
        return self.record.check_out_time if self.record else None

    @property
    def work_hours(self) -> Optional[float]:
        return self.record.work_hours if self.record else None
