from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..core.enums import AttendanceStatus


def normalize_badge(value: Any) -> str:
    """Identity key used to match punches to employees: trimmed string form."""
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class AttendanceEvent:
    """One raw punch from the attendance source.

    Several events per (badge, work_date) are normal; none of them is unique.
    """

    badge: str
    work_date: date
    check_in: Optional[Any] = None
    check_out: Optional[Any] = None

    @property
    def badge_key(self) -> str:
        return normalize_badge(self.badge)

    @property
    def has_check_in(self) -> bool:
        if self.check_in is None:
            return False
        if isinstance(self.check_in, str):
            return bool(self.check_in.strip())
        return True


@dataclass(frozen=True)
class PresenceFact:
    """Collapsed view of one employee-day."""

    work_date: Optional[date]
    present: bool
    late: bool
    status: AttendanceStatus
    first_check_in: Optional[int] = None
    last_check_out: Optional[int] = None
    worked_minutes: int = 0
    note: Optional[str] = None

    @property
    def completed(self) -> bool:
        """Both a check-in and a later check-out were recorded."""
        return self.worked_minutes > 0


@dataclass(frozen=True)
class DailyAttendanceLog:
    """Read-model for the per-employee log view (earliest in, latest out)."""

    work_date: date
    check_in: Optional[str]
    check_out: Optional[str]
    late: bool
    worked_minutes: int


@dataclass(frozen=True)
class DailySnapshot:
    work_date: date
    active_employees: int
    present: int
    late: int
    absent: int
