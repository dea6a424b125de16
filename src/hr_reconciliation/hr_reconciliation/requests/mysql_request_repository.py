from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, map_rows
from .model import LeaveRequest
from .repository import LeaveRequestRepository


def _to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=str(r["request_id"]),
        employee_id=str(r["employee_id"]).strip(),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r["status"]),
        leave_type=r.get("leave_type"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(
        self,
        *,
        employee_id: str,
        status: Optional[LeaveStatus] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["employee_id=%s"]
        params: list[object] = [str(employee_id).strip()]

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if end is not None:
            clauses.append("start_date <= %s")
            params.append(end)
        if start is not None:
            clauses.append("end_date >= %s")
            params.append(start)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory, source="leave_requests") as (_, cur):
            cur.execute(
                f"""
                SELECT request_id, employee_id, start_date, end_date, status, leave_type
                FROM leave_requests
                WHERE {where}
                ORDER BY start_date ASC, request_id ASC
                """,
                tuple(params),
            )
            return map_rows(fetchall(cur), _to_request, source="leave_requests")
