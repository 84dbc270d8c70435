from __future__ import annotations

import logging
from datetime import date

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days
from ..common.validators import require_date_range
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeDirectory

logger = logging.getLogger(__name__)


class LeaveService:
    """Entry point for the leave-approval collaborator.

    The caller has already approved the leave; this only overlays ON_LEAVE.
    A range is applied in one transaction, so it lands completely or not at all.
    """

    def __init__(self, attendance: AttendanceRepository, directory: EmployeeDirectory):
        self._attendance = attendance
        self._directory = directory

    def _require_employee(self, employee_id: int) -> int:
        employee_id = int(employee_id)
        if self._directory.get_by_id(employee_id) is None:
            raise ValidationError(f"Unknown employee: {employee_id}")
        return employee_id

    def mark_leave(self, employee_id: int, work_date: date) -> AttendanceRecord:
        employee_id = self._require_employee(employee_id)
        return self._attendance.mark_leave(employee_id=employee_id, work_date=work_date)

    def mark_leave_range(self, employee_id: int, start_date: date, end_date: date) -> list[AttendanceRecord]:
        require_date_range(start_date, end_date)
        employee_id = self._require_employee(employee_id)
        records = self._attendance.mark_leave_days(
            employee_id=employee_id, work_dates=list(iter_days(start_date, end_date))
        )
        logger.info(
            "Leave applied employee=%s %s..%s (%s days)",
            employee_id, start_date.isoformat(), end_date.isoformat(), len(records),
        )
        return records
