from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceEvent


class AttendanceRepository(Protocol):
    """Raw punch source. Several events per badge and day are expected."""

    def list_events(self, *, badge: str, start_date: date, end_date: date) -> Sequence[AttendanceEvent]:
        raise NotImplementedError

    def list_events_on(self, work_date: date) -> Sequence[AttendanceEvent]:
        """All badges' events for one date (dashboard snapshot)."""

        raise NotImplementedError
