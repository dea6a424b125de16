from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..core.enums import EmployeeStatus
from ..users.model import Employee
from ..workdays.model import ReconciliationConfig
from .cutoff import CutoffResolver
from .deduplicator import collapse_day, collapse_events, group_by_badge
from .factory import AttendanceStrategyFactory
from .model import DailyAttendanceLog, DailySnapshot
from .repository import AttendanceRepository
from .time_normalizer import format_minutes

logger = logging.getLogger(__name__)


class AttendanceService:
    """Day-level attendance views built from raw punches."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def daily_log(
        self,
        badge: str,
        *,
        start: date,
        end: date,
        config: Optional[ReconciliationConfig] = None,
        campus: Optional[str] = None,
    ) -> list[DailyAttendanceLog]:
        """Earliest check-in and latest check-out per date, newest date first."""
        config = config or ReconciliationConfig()
        cutoff = CutoffResolver(config.campus_hours, default_minutes=config.default_cutoff_minutes).cutoff_for(campus)

        events = self._attendance.list_events(badge=badge, start_date=start, end_date=end)
        facts = collapse_events(events, cutoff, badge=badge, factory=self._factory)

        rows = [
            DailyAttendanceLog(
                work_date=work_date,
                check_in=format_minutes(f.first_check_in) if f.first_check_in is not None else None,
                check_out=format_minutes(f.last_check_out) if f.last_check_out is not None else None,
                late=f.late,
                worked_minutes=f.worked_minutes,
            )
            for work_date, f in facts.items()
        ]
        rows.sort(key=lambda r: r.work_date, reverse=True)
        return rows

    def daily_snapshot(
        self,
        work_date: date,
        employees: Iterable[Employee],
        *,
        config: Optional[ReconciliationConfig] = None,
    ) -> DailySnapshot:
        """Present/late/absent counts over active employees for one date.

        Absent is active minus present, floored at zero.
        """
        config = config or ReconciliationConfig()
        resolver = CutoffResolver(config.campus_hours, default_minutes=config.default_cutoff_minutes)

        active = [e for e in employees if e.status == EmployeeStatus.ACTIVE]
        by_badge = group_by_badge(self._attendance.list_events_on(work_date))

        present = 0
        late = 0
        for emp in active:
            day_events = by_badge.get(emp.badge_key)
            if not day_events:
                continue
            fact = collapse_day(day_events, resolver.cutoff_for(emp.campus), work_date=work_date, factory=self._factory)
            if fact.present:
                present += 1
                if fact.late:
                    late += 1

        unmatched = set(by_badge) - {e.badge_key for e in active}
        if unmatched:
            logger.debug("%d badges on %s have no active employee", len(unmatched), work_date)

        return DailySnapshot(
            work_date=work_date,
            active_employees=len(active),
            present=present,
            late=late,
            absent=max(len(active) - present, 0),
        )
