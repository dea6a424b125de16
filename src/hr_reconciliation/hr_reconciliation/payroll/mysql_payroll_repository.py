from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..common.period import Period
from ..core.exceptions import ConcurrentUpdateError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_row, map_rows
from .model import PayrollRecord
from .repository import PayrollRepository

_COLUMNS = """
    employee_id, period, hourly_rate_used, total_work_hours, base_salary,
    bonus, deductions, net_salary_calculated, net_salary_final,
    is_overridden, notes, version, updated_at
"""


def _to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        employee_id=str(r["employee_id"]),
        period=Period.parse(r["period"]),
        hourly_rate_used=float(r["hourly_rate_used"]),
        total_work_hours=float(r["total_work_hours"]),
        base_salary=float(r["base_salary"]),
        bonus=float(r["bonus"]),
        deductions=float(r["deductions"]),
        net_salary_calculated=float(r["net_salary_calculated"]),
        net_salary_final=float(r["net_salary_final"]),
        is_overridden=bool(r["is_overridden"]),
        notes=r.get("notes") or "",
        version=int(r["version"]),
        updated_at=r.get("updated_at"),
    )


def _values(record: PayrollRecord) -> tuple:
    return (
        record.hourly_rate_used,
        record.total_work_hours,
        record.base_salary,
        record.bonus,
        record.deductions,
        record.net_salary_calculated,
        record.net_salary_final,
        int(record.is_overridden),
        record.notes,
    )


class MySQLPayrollRepository(PayrollRepository):
    """monthly_payrolls has UNIQUE(employee_id, period); every save is a single statement."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, employee_id: str, period: Period) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory, source="payroll") as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM monthly_payrolls WHERE employee_id=%s AND period=%s",
                (employee_id, period.label),
            )
            r = fetchone(cur)
            return map_row(r, _to_record, source="payroll") if r else None

    def upsert(self, record: PayrollRecord, *, expected_version: Optional[int] = None) -> PayrollRecord:
        key = (record.employee_id, record.period.label)

        with db_cursor(self._conn_factory, source="payroll") as (_, cur):
            if expected_version is None:
                cur.execute(
                    """
                    INSERT INTO monthly_payrolls(
                        employee_id, period, hourly_rate_used, total_work_hours, base_salary,
                        bonus, deductions, net_salary_calculated, net_salary_final,
                        is_overridden, notes, version, calculated_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1,NOW(),NOW())
                    ON DUPLICATE KEY UPDATE
                        hourly_rate_used=VALUES(hourly_rate_used),
                        total_work_hours=VALUES(total_work_hours),
                        base_salary=VALUES(base_salary),
                        bonus=VALUES(bonus),
                        deductions=VALUES(deductions),
                        net_salary_calculated=VALUES(net_salary_calculated),
                        net_salary_final=VALUES(net_salary_final),
                        is_overridden=VALUES(is_overridden),
                        notes=VALUES(notes),
                        version=version+1,
                        updated_at=NOW()
                    """,
                    key + _values(record),
                )
            elif int(expected_version) == 0:
                try:
                    cur.execute(
                        """
                        INSERT INTO monthly_payrolls(
                            employee_id, period, hourly_rate_used, total_work_hours, base_salary,
                            bonus, deductions, net_salary_calculated, net_salary_final,
                            is_overridden, notes, version, calculated_at, updated_at
                        )
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1,NOW(),NOW())
                        """,
                        key + _values(record),
                    )
                except mysql.connector.IntegrityError:
                    raise ConcurrentUpdateError(f"payroll {key[0]} {key[1]} was created concurrently")
            else:
                cur.execute(
                    """
                    UPDATE monthly_payrolls
                    SET hourly_rate_used=%s, total_work_hours=%s, base_salary=%s,
                        bonus=%s, deductions=%s, net_salary_calculated=%s, net_salary_final=%s,
                        is_overridden=%s, notes=%s, version=version+1, updated_at=NOW()
                    WHERE employee_id=%s AND period=%s AND version=%s
                    """,
                    _values(record) + key + (int(expected_version),),
                )
                if cur.rowcount == 0:
                    raise ConcurrentUpdateError(
                        f"payroll {key[0]} {key[1]} changed since version {int(expected_version)}"
                    )

            cur.execute(f"SELECT {_COLUMNS} FROM monthly_payrolls WHERE employee_id=%s AND period=%s", key)
            return map_row(fetchone(cur), _to_record, source="payroll")

    def list_for_year(self, *, employee_id: str, year: int) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory, source="payroll") as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM monthly_payrolls
                WHERE employee_id=%s AND period BETWEEN %s AND %s
                ORDER BY period ASC
                """,
                (employee_id, f"{int(year):04d}-01", f"{int(year):04d}-12"),
            )
            return map_rows(fetchall(cur), _to_record, source="payroll")
