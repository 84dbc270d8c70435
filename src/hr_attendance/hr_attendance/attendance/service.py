from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional

from ..access.policy import require_hr_scope
from ..common.datetime_utils import work_date_for
from ..core.actor import Actor
from ..core.enums import DayState
from ..core.exceptions import DomainError, ValidationError
from ..employees.repository import EmployeeDirectory
from . import engine
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TodayStatus:
    """What the self-service UI renders from: the persisted record, never local state."""

    work_date: date
    state: DayState
    record: Optional[AttendanceRecord]


class AttendanceService:
    """Self-service check-in/out for the calling employee.

    The caller supplies the current moment and the employee's time zone;
    the day a check-in belongs to is decided from those two, not from the
    server clock.
    """

    def __init__(self, attendance: AttendanceRepository, directory: EmployeeDirectory):
        self._attendance = attendance
        self._directory = directory

    def _require_employee(self, actor: Actor) -> None:
        if self._directory.get_by_id(actor.actor_id) is None:
            raise ValidationError(f"Unknown employee: {actor.actor_id}")

    def check_in(self, actor: Actor, *, now: datetime, tz: tzinfo) -> AttendanceRecord:
        work_date = work_date_for(now, tz)
        self._require_employee(actor)
        try:
            return self._attendance.upsert_check_in(employee_id=actor.actor_id, work_date=work_date, timestamp=now)
        except DomainError as e:
            logger.warning("Check-in rejected employee=%s date=%s: %s", actor.actor_id, work_date, e)
            raise

    def check_out(self, actor: Actor, *, now: datetime, tz: tzinfo) -> AttendanceRecord:
        work_date = work_date_for(now, tz)
        self._require_employee(actor)
        try:
            return self._attendance.upsert_check_out(employee_id=actor.actor_id, work_date=work_date, timestamp=now)
        except DomainError as e:
            logger.warning("Check-out rejected employee=%s date=%s: %s", actor.actor_id, work_date, e)
            raise

    def today(self, actor: Actor, *, now: datetime, tz: tzinfo) -> TodayStatus:
        work_date = work_date_for(now, tz)
        record = self._attendance.get_for_employee_and_date(actor.actor_id, work_date)
        return TodayStatus(work_date=work_date, state=engine.day_state(record), record=record)

    def materialize_absences(self, actor: Actor, work_date: date) -> int:
        """Close a day for HR: store explicit ABSENT rows for visible employees without one."""
        scope = require_hr_scope(actor)
        return self._attendance.materialize_absences(work_date=work_date, employee_ids=scope)
