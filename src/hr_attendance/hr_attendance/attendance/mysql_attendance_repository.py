from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from ..common.datetime_utils import from_storage, to_storage
from ..common.validators import normalize_query
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, like_pattern
from ..employees.model import EmployeeIdentity
from . import engine
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_RECORD_COLUMNS = (
    "ar.record_id, ar.employee_id, ar.work_date, ar.check_in_time, ar.check_out_time, "
    "ar.work_hours, ar.status, ar.on_leave"
)


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    work_hours = r.get("work_hours")
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=from_storage(r.get("check_in_time")),
        check_out_time=from_storage(r.get("check_out_time")),
        status=AttendanceStatus(r["status"]),
        work_hours=float(work_hours) if work_hours is not None else None,
        on_leave=bool(r.get("on_leave")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records ar
                WHERE ar.employee_id=%s AND ar.work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    # -- writes: materialize under the unique key, lock the row, derive, save --

    @staticmethod
    def _materialize(cur, employee_id: int, work_date: date) -> None:
        cur.execute(
            """
            INSERT INTO attendance_records(employee_id, work_date, status, on_leave)
            VALUES(%s,%s,%s,0)
            ON DUPLICATE KEY UPDATE record_id = record_id
            """,
            (int(employee_id), work_date, AttendanceStatus.ABSENT.value),
        )

    @staticmethod
    def _lock(cur, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        cur.execute(
            f"""
            SELECT {_RECORD_COLUMNS}
            FROM attendance_records ar
            WHERE ar.employee_id=%s AND ar.work_date=%s
            FOR UPDATE
            """,
            (int(employee_id), work_date),
        )
        r = fetchone(cur)
        return _to_record(r) if r else None

    @staticmethod
    def _save(cur, record: AttendanceRecord) -> None:
        cur.execute(
            """
            UPDATE attendance_records
            SET check_in_time=%s, check_out_time=%s, work_hours=%s, status=%s, on_leave=%s
            WHERE record_id=%s
            """,
            (
                to_storage(record.check_in_time),
                to_storage(record.check_out_time),
                record.work_hours,
                record.status.value,
                int(record.on_leave),
                record.record_id,
            ),
        )

    def upsert_check_in(self, *, employee_id: int, work_date: date, timestamp: datetime) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            self._materialize(cur, employee_id, work_date)
            current = self._lock(cur, employee_id, work_date)
            updated = engine.apply_check_in(current, timestamp)
            self._save(cur, updated)
        logger.info("Check-in recorded employee=%s date=%s", employee_id, work_date.isoformat())
        return updated

    def upsert_check_out(self, *, employee_id: int, work_date: date, timestamp: datetime) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            current = self._lock(cur, employee_id, work_date)
            updated = engine.apply_check_out(current, timestamp)
            self._save(cur, updated)
        logger.info("Check-out recorded employee=%s date=%s", employee_id, work_date.isoformat())
        return updated

    def mark_leave(self, *, employee_id: int, work_date: date) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            self._materialize(cur, employee_id, work_date)
            current = self._lock(cur, employee_id, work_date)
            updated = engine.apply_leave(current)
            self._save(cur, updated)
        logger.info("Leave marked employee=%s date=%s", employee_id, work_date.isoformat())
        return updated

    def mark_leave_days(self, *, employee_id: int, work_dates: Sequence[date]) -> list[AttendanceRecord]:
        updated: list[AttendanceRecord] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for work_date in work_dates:
                self._materialize(cur, employee_id, work_date)
                record = engine.apply_leave(self._lock(cur, employee_id, work_date))
                self._save(cur, record)
                updated.append(record)
        logger.info("Leave marked employee=%s days=%s", employee_id, len(updated))
        return updated

    def materialize_absences(self, *, work_date: date, employee_ids: Iterable[int]) -> int:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT IGNORE INTO attendance_records(employee_id, work_date, status, on_leave)
                VALUES(%s,%s,%s,0)
                """,
                [(i, work_date, AttendanceStatus.ABSENT.value) for i in ids],
            )
            created = int(cur.rowcount or 0)
        logger.info("Materialized %s absence(s) for %s", created, work_date.isoformat())
        return created

    # -- reads --

    def find_by_range_and_employees(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Iterable[int],
        text_query: str = "",
    ) -> Sequence[AttendanceReportRow]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return []

        clauses = ["ar.work_date BETWEEN %s AND %s", f"ar.employee_id IN ({in_clause(ids)})"]
        params: list[object] = [start_date, end_date, *ids]

        needle = normalize_query(text_query)
        if needle:
            clauses.append(
                "(LOWER(e.name) LIKE %s OR LOWER(e.email) LIKE %s OR LOWER(COALESCE(e.employee_code, '')) LIKE %s)"
            )
            pattern = like_pattern(needle)
            params.extend([pattern, pattern, pattern])

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_RECORD_COLUMNS},
                    e.name, e.email, e.avatar_ref, e.employee_code
                FROM attendance_records ar
                JOIN employees e ON e.employee_id = ar.employee_id
                WHERE {where}
                ORDER BY ar.work_date DESC, e.name ASC, ar.employee_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    employee=EmployeeIdentity(
                        employee_id=int(r["employee_id"]),
                        name=r["name"],
                        email=r["email"],
                        avatar_ref=r.get("avatar_ref"),
                        employee_code=r.get("employee_code"),
                    ),
                    work_date=r["work_date"],
                    record=_to_record(r),
                )
                for r in rows
            ]
