from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import EmployeeIdentity
from .repository import EmployeeDirectory


def _to_identity(r: Dict[str, Any]) -> EmployeeIdentity:
    return EmployeeIdentity(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        avatar_ref=r.get("avatar_ref"),
        employee_code=r.get("employee_code"),
    )


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[EmployeeIdentity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, email, avatar_ref, employee_code
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _to_identity(r) if r else None

    def list_by_ids(self, employee_ids: Iterable[int]) -> Sequence[EmployeeIdentity]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, name, email, avatar_ref, employee_code
                FROM employees
                WHERE employee_id IN ({in_clause(ids)})
                ORDER BY name ASC, employee_id ASC
                """,
                tuple(ids),
            )
            return [_to_identity(r) for r in fetchall(cur)]

    def list_ids_managed_by(self, hr_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees WHERE hr_id=%s", (int(hr_id),))
            return [int(r["employee_id"]) for r in fetchall(cur)]
