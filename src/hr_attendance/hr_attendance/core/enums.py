from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the actor calling into the core."""

    HR = "HR"
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"


class AttendanceStatus(str, Enum):
    """Per-day classification stored with each record."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"


class DayState(str, Enum):
    """Self-service state of an employee's day."""

    NOT_STARTED = "NOT_STARTED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    ON_LEAVE = "ON_LEAVE"
