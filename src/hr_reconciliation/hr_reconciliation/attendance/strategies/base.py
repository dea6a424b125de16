from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None

    @property
    def late(self) -> bool:
        return self.status == AttendanceStatus.LATE


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, check_in_minutes: Optional[int], cutoff_minutes: int) -> StatusDecision:
        raise NotImplementedError
