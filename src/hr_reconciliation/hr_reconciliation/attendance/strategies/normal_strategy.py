from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in."""

    def decide_checkin(self, *, check_in_minutes: Optional[int], cutoff_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
