from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class UnparsedStrategy(AttendanceStrategy):
    """Present, but no check-in time could be read; lateness is undetermined."""

    def decide_checkin(self, *, check_in_minutes: Optional[int], cutoff_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.UNKNOWN, note="Unreadable check-in time")
