from __future__ import annotations

from datetime import date
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, map_rows
from .model import AttendanceEvent, normalize_badge
from .repository import AttendanceRepository

_SELECT = """
    SELECT badge, work_date, check_in, check_out
    FROM attendance_log
"""


def _to_event(r: dict) -> AttendanceEvent:
    # check_in/check_out are kept raw (string or TIME); the time normalizer reads both.
    return AttendanceEvent(
        badge=normalize_badge(r["badge"]),
        work_date=r["work_date"],
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_events(self, *, badge: str, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory, source="attendance") as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE TRIM(badge)=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, log_id ASC
                """,
                (normalize_badge(badge), start_date, end_date),
            )
            return map_rows(fetchall(cur), _to_event, source="attendance")

    def list_events_on(self, work_date: date) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory, source="attendance") as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE work_date=%s
                ORDER BY log_id ASC
                """,
                (work_date,),
            )
            return map_rows(fetchall(cur), _to_event, source="attendance")
