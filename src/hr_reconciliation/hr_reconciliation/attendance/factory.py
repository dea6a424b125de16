from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.unparsed_strategy import UnparsedStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, check_in_minutes: Optional[int], cutoff_minutes: int) -> AttendanceStrategy:
        if check_in_minutes is None:
            return UnparsedStrategy()

        if check_in_minutes <= cutoff_minutes:
            return NormalStrategy()
        return LateStrategy()
