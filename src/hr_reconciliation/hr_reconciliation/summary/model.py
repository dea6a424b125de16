from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.period import Period
from ..core.exceptions import DataSourceError
from ..requests.model import LeaveRequest


@dataclass(frozen=True)
class SourceFailure:
    source: str
    message: str


@dataclass(frozen=True)
class MonthlySummary:
    """Per-employee, per-month read model.

    A source listed in ``failures`` contributed nothing: its counters are zero
    because the fetch failed, not because there was no data.
    """

    employee_id: str
    period: Period
    present_days: int = 0
    late_days: int = 0
    worked_minutes: int = 0
    approved_leave_days: int = 0
    approved_leave_application_count: int = 0
    other_leave_requests: tuple[LeaveRequest, ...] = ()
    working_days: Optional[int] = None
    absent_days: Optional[int] = None
    expected_minutes: Optional[int] = None
    today_worked_minutes: Optional[int] = None
    failures: tuple[SourceFailure, ...] = ()

    @property
    def worked_hours(self) -> float:
        return round(self.worked_minutes / 60, 2)

    @property
    def is_complete(self) -> bool:
        return not self.failures

    def failed(self, source: str) -> bool:
        return any(f.source == source for f in self.failures)

    def raise_for_failures(self) -> None:
        if not self.failures:
            return
        detail = "; ".join(f"{f.source}: {f.message}" for f in self.failures)
        raise DataSourceError(
            f"summary for {self.employee_id} {self.period} is incomplete ({detail})",
            source=self.failures[0].source,
        )


@dataclass(frozen=True)
class BatchSummaryResult:
    period: Period
    summaries: dict[str, MonthlySummary] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
