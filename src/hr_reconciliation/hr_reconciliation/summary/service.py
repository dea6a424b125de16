from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Sequence

from ..attendance.cutoff import CutoffResolver
from ..attendance.deduplicator import collapse_events
from ..attendance.factory import AttendanceStrategyFactory
from ..attendance.model import PresenceFact
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.period import Period
from ..core.exceptions import DomainError
from ..requests.model import LeaveRequest
from ..requests.repository import LeaveRequestRepository
from ..requests.service import approved_leave_dates
from ..users.model import Employee
from ..workdays.counter import iter_work_days
from ..workdays.model import Holiday, ReconciliationConfig
from ..workdays.overlap import overlap_days
from ..workdays.repository import HolidayCalendar
from .model import BatchSummaryResult, MonthlySummary, SourceFailure

logger = logging.getLogger(__name__)


class MonthlyAggregator:
    """Build a MonthlySummary for one employee and one month.

    Attendance, leave and holidays are fetched independently; a failing source
    is recorded in ``failures`` and leaves only its own counters empty.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRequestRepository,
        holidays: HolidayCalendar,
        *,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._holidays = holidays
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock

    def summarize(
        self,
        employee: Employee,
        year: int,
        month: int,
        *,
        config: Optional[ReconciliationConfig] = None,
        today: Optional[date] = None,
        resolver: Optional[CutoffResolver] = None,
    ) -> MonthlySummary:
        period = Period(year=int(year), month=int(month))
        config = config or ReconciliationConfig()
        resolver = resolver or CutoffResolver(config.campus_hours, default_minutes=config.default_cutoff_minutes)
        failures: list[SourceFailure] = []

        facts = self._presence(employee, period, resolver, failures)
        leave_requests = self._leave_requests(employee, period, failures)
        holidays = self._holiday_list(period, failures)

        present = [f for f in facts.values() if f.present] if facts is not None else []

        approved: list[LeaveRequest] = []
        others: list[LeaveRequest] = []
        for req in leave_requests or ():
            if not req.intersects(period.start, period.end):
                continue
            (approved if req.approved else others).append(req)

        working_days = None
        absent_days = None
        expected_minutes = None
        if leave_requests is not None and holidays is not None:
            leave_dates = approved_leave_dates(approved, period.start, period.end)
            work_dates = set(
                iter_work_days(period.start, period.end, weekend=config.weekend, holidays=holidays, leave_days=leave_dates)
            )
            working_days = len(work_dates)
            expected_minutes = int(round(working_days * config.standard_workday_hours * 60))
            if facts is not None:
                present_on_work_days = sum(1 for f in present if f.work_date in work_dates)
                absent_days = max(working_days - present_on_work_days, 0)

        return MonthlySummary(
            employee_id=employee.employee_id,
            period=period,
            present_days=len(present),
            late_days=sum(1 for f in present if f.late),
            worked_minutes=sum(f.worked_minutes for f in present),
            approved_leave_days=sum(overlap_days(r.start_date, r.end_date, period.start, period.end) for r in approved),
            approved_leave_application_count=len({r.request_id for r in approved}),
            other_leave_requests=tuple(others),
            working_days=working_days,
            absent_days=absent_days,
            expected_minutes=expected_minutes,
            today_worked_minutes=self._today_minutes(facts, period, today),
            failures=tuple(failures),
        )

    def summarize_many(
        self,
        employees: Iterable[Employee],
        year: int,
        month: int,
        *,
        config: Optional[ReconciliationConfig] = None,
        today: Optional[date] = None,
    ) -> BatchSummaryResult:
        """Independent summaries; one employee's failure never aborts the batch."""
        period = Period(year=int(year), month=int(month))
        config = config or ReconciliationConfig()
        resolver = CutoffResolver(config.campus_hours, default_minutes=config.default_cutoff_minutes)
        result = BatchSummaryResult(period=period)

        for emp in employees:
            try:
                summary = self.summarize(emp, year, month, config=config, today=today, resolver=resolver)
            except DomainError as exc:
                logger.error("summary for employee %s %s failed: %s", emp.employee_id, period, exc)
                result.errors[emp.employee_id] = str(exc)
                continue

            result.summaries[emp.employee_id] = summary
            if summary.failures:
                result.errors[emp.employee_id] = "; ".join(f"{f.source}: {f.message}" for f in summary.failures)
        return result

    def _presence(
        self,
        employee: Employee,
        period: Period,
        resolver: CutoffResolver,
        failures: list[SourceFailure],
    ) -> Optional[dict[date, PresenceFact]]:
        try:
            events = self._attendance.list_events(
                badge=employee.badge_key, start_date=period.start, end_date=period.end
            )
        except DomainError as exc:
            self._record(failures, "attendance", employee, period, exc)
            return None

        cutoff = resolver.cutoff_for(employee.campus)
        in_period = [ev for ev in events if period.contains(ev.work_date)]
        return collapse_events(in_period, cutoff, badge=employee.badge_key, factory=self._factory)

    def _leave_requests(
        self,
        employee: Employee,
        period: Period,
        failures: list[SourceFailure],
    ) -> Optional[Sequence[LeaveRequest]]:
        try:
            return self._leaves.list_for_employee(employee_id=employee.employee_id, start=period.start, end=period.end)
        except DomainError as exc:
            self._record(failures, "leave", employee, period, exc)
            return None

    def _holiday_list(self, period: Period, failures: list[SourceFailure]) -> Optional[Sequence[Holiday]]:
        try:
            return self._holidays.list_holidays(start=period.start, end=period.end)
        except DomainError as exc:
            failures.append(SourceFailure(source="holidays", message=str(exc)))
            logger.warning("holiday fetch failed for %s: %s", period, exc)
            return None

    def _today_minutes(
        self,
        facts: Optional[dict[date, PresenceFact]],
        period: Period,
        today: Optional[date],
    ) -> Optional[int]:
        # Live dashboard figure for the current day only.
        if facts is None:
            return None
        today = today or self._clock().date()
        if not period.contains(today):
            return None
        fact = facts.get(today)
        if fact is None or not fact.completed:
            return None
        return fact.worked_minutes

    @staticmethod
    def _record(failures: list[SourceFailure], source: str, employee: Employee, period: Period, exc: Exception) -> None:
        failures.append(SourceFailure(source=source, message=str(exc)))
        logger.warning("%s fetch failed for employee %s %s: %s", source, employee.employee_id, period, exc)
