from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import normalize_badge
from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Directory entry as consumed by reconciliation and payroll.

    ``badge`` is the identifier the attendance source uses; it may differ from
    ``employee_id``.
    """

    employee_id: str
    badge: str
    full_name: str = ""
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    campus: Optional[str] = None
    hourly_rate: float = 0.0

    @property
    def badge_key(self) -> str:
        return normalize_badge(self.badge)
