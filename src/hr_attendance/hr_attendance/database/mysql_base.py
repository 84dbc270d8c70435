from __future__ import annotations

import logging
from contextlib import contextmanager, suppress
from typing import Any, Dict, List, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreUnavailableError, ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Connector failures that mean "store unreachable", as opposed to SQL or data errors.
TRANSIENT_ERRORS = (mysql.connector.errors.OperationalError, mysql.connector.errors.InterfaceError)


def _connect(conn_factory: DatabaseConnection):
    try:
        return conn_factory.connect()
    except TRANSIENT_ERRORS as e:
        logger.warning("Record store unavailable: %s", e)
        raise StoreUnavailableError("Record store unavailable") from e


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One transaction: commit when the block completes, rollback on any error."""
    conn = _connect(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except TRANSIENT_ERRORS as e:
        with suppress(*TRANSIENT_ERRORS):
            conn.rollback()
        logger.warning("Record store failure mid-transaction: %s", e)
        raise StoreUnavailableError("Record store unavailable") from e
    except mysql.connector.errors.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_NO_REFERENCED_ROW_2:
            raise ValidationError("Unknown employee") from e
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for `IN (...)`; caller passes the values as params."""
    return ", ".join(["%s"] * len(values))


def like_pattern(needle: str) -> str:
    """Substring LIKE pattern with `%`, `_` and `\\` escaped."""
    escaped = needle.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
