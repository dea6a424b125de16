from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, check_in_minutes: Optional[int], cutoff_minutes: int) -> StatusDecision:
        late_by = int(check_in_minutes or 0) - int(cutoff_minutes)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Late by {late_by} min")
