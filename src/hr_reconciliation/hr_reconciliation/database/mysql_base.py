from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import mysql.connector

from ..core.exceptions import DataSourceError, ValidationError
from .connection import DatabaseConnection

T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, source: Optional[str] = None):
    """Yield (conn, cursor); commit on success, roll back on error.

    Connector failures surface as DataSourceError tagged with ``source`` so
    callers can tell a failed read from an empty one.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise DataSourceError(f"cannot connect: {exc}", source=source) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise DataSourceError(str(exc), source=source) from exc
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


def map_row(row: Dict[str, Any], to_model: Callable[[Dict[str, Any]], T], *, source: Optional[str] = None) -> T:
    """Build a domain object from one row; a row that does not fit the model is a DataSourceError."""
    try:
        return to_model(row)
    except (KeyError, TypeError, ValueError, ValidationError) as exc:
        raise DataSourceError(f"unreadable {source or 'database'} row: {exc}", source=source) from exc


def map_rows(
    rows: Iterable[Dict[str, Any]], to_model: Callable[[Dict[str, Any]], T], *, source: Optional[str] = None
) -> List[T]:
    return [map_row(r, to_model, source=source) for r in rows]


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME column value as datetime.time, or None when empty or unreadable.

    The connector returns TIME as timedelta; older rows imported as VARCHAR come
    back as "HH:MM[:SS]" strings.
    """
    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(hour=seconds // 3600, minute=(seconds % 3600) // 60, second=seconds % 60)

    parts = str(value).strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        return None
    hour, minute, second = (int(p) for p in (parts + ["0"])[:3])
    if hour > 23 or minute > 59 or second > 59:
        return None
    return time(hour=hour, minute=minute, second=second)
