from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LeaveRequest:
    """Leave request as owned by the approval workflow; read-only here."""

    request_id: str
    employee_id: str
    start_date: date
    end_date: date
    status: LeaveStatus
    leave_type: Optional[str] = None

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValidationError(
                "End date must be on or after start date",
                errors={"end_date": "before start_date"},
            )

    @property
    def approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED

    def intersects(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start
