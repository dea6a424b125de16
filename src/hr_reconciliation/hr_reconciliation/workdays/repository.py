from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CampusWorkingHours, Holiday


class HolidayCalendar(Protocol):
    def list_holidays(self, *, start: date, end: date) -> Sequence[Holiday]:
        raise NotImplementedError


class SettingsRepository(Protocol):
    """Stored settings.

    Getters return None when a setting was never saved and raise
    ValidationError when the stored value cannot be read.
    """

    def get_weekend_days(self) -> Optional[Sequence[int]]:
        raise NotImplementedError

    def list_campus_working_hours(self) -> Sequence[CampusWorkingHours]:
        raise NotImplementedError

    def get_standard_workday_hours(self) -> Optional[float]:
        raise NotImplementedError
