from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, map_rows, normalize_mysql_time
from .model import CampusWorkingHours, Holiday
from .repository import HolidayCalendar, SettingsRepository


def _time_str(value) -> Optional[str]:
    t = normalize_mysql_time(value)
    return t.strftime("%H:%M") if t else None


def _to_holiday(r: dict) -> Holiday:
    return Holiday(holiday_date=r["holiday_date"], name=r.get("name") or "")


def _to_campus_hours(r: dict) -> CampusWorkingHours:
    return CampusWorkingHours(
        campus=r["campus_name"],
        check_in_start=_time_str(r.get("check_in_start")) or "",
        check_in_end=_time_str(r.get("check_in_end")) or "",
        check_out_start=_time_str(r.get("check_out_start")),
        check_out_end=_time_str(r.get("check_out_end")),
    )


def _invalid(key: str, value) -> ValidationError:
    return ValidationError(f"setting {key!r} has an invalid value: {value!r}", errors={key: "invalid"})


class MySQLHolidayCalendar(HolidayCalendar):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_holidays(self, *, start: date, end: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory, source="holidays") as (_, cur):
            cur.execute(
                """
                SELECT holiday_date, name
                FROM holidays
                WHERE holiday_date BETWEEN %s AND %s
                ORDER BY holiday_date ASC
                """,
                (start, end),
            )
            return map_rows(fetchall(cur), _to_holiday, source="holidays")


class MySQLSettingsRepository(SettingsRepository):
    """Settings are stored as JSON values in a key/value table."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_value(self, key: str):
        with db_cursor(self._conn_factory, source="settings") as (_, cur):
            cur.execute("SELECT setting_value FROM settings WHERE setting_key=%s", (key,))
            r = fetchone(cur)
        if not r or r.get("setting_value") is None:
            return None
        try:
            return json.loads(r["setting_value"])
        except (TypeError, ValueError):
            raise _invalid(key, r["setting_value"])

    def get_weekend_days(self) -> Optional[Sequence[int]]:
        value = self._get_value("weekend")
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(d, int) and not isinstance(d, bool) for d in value):
            raise _invalid("weekend", value)
        return value

    def get_standard_workday_hours(self) -> Optional[float]:
        value = self._get_value("workday_standard_hours")
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _invalid("workday_standard_hours", value)
        return float(value)

    def list_campus_working_hours(self) -> Sequence[CampusWorkingHours]:
        with db_cursor(self._conn_factory, source="campus_working_hours") as (_, cur):
            cur.execute(
                """
                SELECT campus_name, check_in_start, check_in_end, check_out_start, check_out_end
                FROM campus_working_hours
                ORDER BY campus_name ASC
                """
            )
            return map_rows(fetchall(cur), _to_campus_hours, source="campus_working_hours")
