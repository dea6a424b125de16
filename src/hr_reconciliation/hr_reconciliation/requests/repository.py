from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def list_for_employee(
        self,
        *,
        employee_id: str,
        status: Optional[LeaveStatus] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[LeaveRequest]:
        """Requests of one employee; when start/end are given, only those intersecting [start, end]."""

        raise NotImplementedError
