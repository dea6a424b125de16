from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import weekday_index
from ..core.constants import (
    DEFAULT_LATE_CUTOFF_MINUTES,
    DEFAULT_STANDARD_WORKDAY_HOURS,
    DEFAULT_WEEKEND_DAYS,
    MAX_STANDARD_WORKDAY_HOURS,
    MIN_STANDARD_WORKDAY_HOURS,
)
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Holiday:
    holiday_date: date
    name: str = ""


@dataclass(frozen=True)
class WeekendConfig:
    """Weekday indices (Sunday=0 ... Saturday=6) treated as non-working."""

    days_of_week: frozenset[int] = frozenset(DEFAULT_WEEKEND_DAYS)

    def __post_init__(self) -> None:
        days = frozenset(int(d) for d in self.days_of_week)
        bad = sorted(d for d in days if not 0 <= d <= 6)
        if bad:
            raise ValidationError(
                f"Weekend days must be between 0 and 6, got {bad}",
                errors={"weekend": "out of range"},
            )
        object.__setattr__(self, "days_of_week", days)

    @classmethod
    def of(cls, days: Iterable[int]) -> "WeekendConfig":
        return cls(days_of_week=frozenset(days))

    def is_weekend(self, day: date) -> bool:
        return weekday_index(day) in self.days_of_week


@dataclass(frozen=True)
class CampusWorkingHours:
    """Check-in/check-out windows of one campus, as HH:MM strings."""

    campus: str
    check_in_start: str
    check_in_end: str
    check_out_start: Optional[str] = None
    check_out_end: Optional[str] = None


@dataclass(frozen=True)
class ReconciliationConfig:
    """Settings passed explicitly into every computation (no ambient globals)."""

    weekend: WeekendConfig = field(default_factory=WeekendConfig)
    campus_hours: Mapping[str, CampusWorkingHours] = field(default_factory=dict)
    default_cutoff_minutes: int = DEFAULT_LATE_CUTOFF_MINUTES
    standard_workday_hours: float = DEFAULT_STANDARD_WORKDAY_HOURS

    def __post_init__(self) -> None:
        hours = self.standard_workday_hours
        if not MIN_STANDARD_WORKDAY_HOURS <= hours <= MAX_STANDARD_WORKDAY_HOURS:
            raise ValidationError(
                "Standard workday hours must be between 1 and 24",
                errors={"standard_workday_hours": "out of range"},
            )
