from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_READ_RETRY_ATTEMPTS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_directory import MySQLEmployeeDirectory
from .leave.service import LeaveService
from .reports.service import AttendanceQueryService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    employee_directory: MySQLEmployeeDirectory

    attendance_service: AttendanceService
    query_service: AttendanceQueryService
    leave_service: LeaveService


def build_container(*, db_config: dict, read_retry_attempts: int = DEFAULT_READ_RETRY_ATTEMPTS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    employee_directory = MySQLEmployeeDirectory(conn)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employee_directory=employee_directory,
        attendance_service=AttendanceService(attendance_repo, employee_directory),
        query_service=AttendanceQueryService(
            attendance_repo,
            employee_directory,
            read_retry_attempts=read_retry_attempts,
        ),
        leave_service=LeaveService(attendance_repo, employee_directory),
    )
