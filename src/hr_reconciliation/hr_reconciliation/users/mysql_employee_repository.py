from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_row, map_rows
from .model import Employee
from .repository import EmployeeDirectory

_SELECT = """
    SELECT employee_id, badge, full_name, status, campus, hourly_rate
    FROM employees
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]).strip(),
        badge=str(r.get("badge") or r["employee_id"]).strip(),
        full_name=r.get("full_name") or "",
        status=EmployeeStatus(r["status"]),
        campus=r.get("campus"),
        hourly_rate=float(r.get("hourly_rate") or 0),
    )


class MySQLEmployeeDirectory(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory, source="employees") as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s", (str(employee_id).strip(),))
            r = fetchone(cur)
            return map_row(r, _to_employee, source="employees") if r else None

    def list_employees(self, *, status: Optional[EmployeeStatus] = None) -> Sequence[Employee]:
        clauses: list[str] = []
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory, source="employees") as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY full_name ASC", tuple(params))
            return map_rows(fetchall(cur), _to_employee, source="employees")
