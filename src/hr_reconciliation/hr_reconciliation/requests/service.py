from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..core.exceptions import ValidationError
from ..workdays.counter import count_work_days
from ..workdays.model import ReconciliationConfig
from ..workdays.overlap import covered_days
from ..workdays.repository import HolidayCalendar
from .model import LeaveRequest


def approved_leave_dates(requests: Iterable[LeaveRequest], start: date, end: date) -> set[date]:
    """Dates inside [start, end] covered by at least one approved request."""
    out: set[date] = set()
    for req in requests:
        if req.approved:
            out |= covered_days(req.start_date, req.end_date, start, end)
    return out


class LeaveService:
    def __init__(self, holidays: HolidayCalendar):
        self._holidays = holidays

    def working_days(self, start: date, end: date, *, config: Optional[ReconciliationConfig] = None) -> int:
        """Days a leave range actually takes off work: weekends and holidays excluded."""
        if end < start:
            raise ValidationError("End date must be on or after start date", errors={"end_date": "before start_date"})

        config = config or ReconciliationConfig()
        holidays = self._holidays.list_holidays(start=start, end=end)
        return count_work_days(start, end, weekend=config.weekend, holidays=holidays)
