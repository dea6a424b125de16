from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.period import Period
from ..common.validators import as_non_negative_number
from ..core.enums import LeaveStatus
from ..core.exceptions import ConcurrentUpdateError, DomainError, ValidationError
from ..requests.repository import LeaveRequestRepository
from ..summary.model import BatchSummaryResult, MonthlySummary
from ..users.model import Employee
from ..workdays.overlap import overlap_days
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator, round_money
from .model import PayrollComputation, PayrollInput, PayrollRecord, validate_payroll_inputs
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

_MAX_MERGE_ATTEMPTS = 3


@dataclass(frozen=True)
class PayrollBatchResult:
    period: Period
    records: dict[str, PayrollRecord] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)


class PayrollService:
    """Compute and store monthly payroll records.

    Two write paths:
    - ``save``: an operator saves the record. An explicit ``final_net_salary``
      becomes an override; omitting it resets the final amount to the calculation.
    - ``recalculate``: the system refreshes inputs. An existing override is kept.
    """

    def __init__(
        self,
        payrolls: PayrollRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._payrolls = payrolls
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    def calculate(
        self,
        *,
        hourly_rate: Any,
        total_work_hours: Any,
        bonus: Any = 0,
        deductions: Any = 0,
    ) -> PayrollComputation:
        inputs = validate_payroll_inputs(
            hourly_rate=hourly_rate, total_work_hours=total_work_hours, bonus=bonus, deductions=deductions
        )
        return self._calculator.compute(inputs)

    def prepare_inputs(
        self,
        employee: Employee,
        summary: MonthlySummary,
        *,
        bonus: Any = 0,
        deductions: Any = 0,
        hourly_rate: Any = None,
    ) -> PayrollInput:
        """Payroll inputs from a monthly summary; hours are worked minutes / 60, to the cent."""
        if summary.failed("attendance"):
            raise ValidationError(
                f"Attendance for {summary.employee_id} {summary.period} could not be read",
                errors={"total_work_hours": "attendance unavailable"},
            )
        rate = employee.hourly_rate if hourly_rate is None else hourly_rate
        hours = round_money(Decimal(summary.worked_minutes) / Decimal(60))
        return validate_payroll_inputs(hourly_rate=rate, total_work_hours=hours, bonus=bonus, deductions=deductions)

    def get(self, employee_id: str, period: Period | str) -> Optional[PayrollRecord]:
        return self._payrolls.get(employee_id=str(employee_id).strip(), period=_as_period(period))

    def save(
        self,
        *,
        employee_id: str,
        period: Period | str,
        hourly_rate: Any,
        total_work_hours: Any,
        bonus: Any = 0,
        deductions: Any = 0,
        final_net_salary: Any = None,
        notes: str = "",
        expected_version: Optional[int] = None,
    ) -> PayrollRecord:
        inputs = validate_payroll_inputs(
            hourly_rate=hourly_rate, total_work_hours=total_work_hours, bonus=bonus, deductions=deductions
        )
        computed = self._calculator.compute(inputs)

        final = computed.net_salary_calculated
        overridden = False
        if final_net_salary is not None:
            final = round_money(as_non_negative_number(final_net_salary, "final_net_salary"))
            overridden = final != computed.net_salary_calculated

        record = self._build(_key(employee_id), _as_period(period), inputs, computed, final, overridden, notes)
        stored = self._payrolls.upsert(record, expected_version=expected_version)
        logger.info(
            "payroll saved for %s %s: net=%s final=%s overridden=%s v%s",
            stored.employee_id, stored.period, stored.net_salary_calculated,
            stored.net_salary_final, stored.is_overridden, stored.version,
        )
        return stored

    def recalculate(
        self,
        *,
        employee_id: str,
        period: Period | str,
        hourly_rate: Any,
        total_work_hours: Any,
        bonus: Any = 0,
        deductions: Any = 0,
        notes: Optional[str] = None,
    ) -> PayrollRecord:
        """Refresh the calculated figures without clobbering an operator override.

        Uses the stored version as an optimistic guard and re-reads on conflict.
        """
        inputs = validate_payroll_inputs(
            hourly_rate=hourly_rate, total_work_hours=total_work_hours, bonus=bonus, deductions=deductions
        )
        computed = self._calculator.compute(inputs)
        employee_id = _key(employee_id)
        period = _as_period(period)

        attempt = 0
        while True:
            attempt += 1
            existing = self._payrolls.get(employee_id=employee_id, period=period)

            final = computed.net_salary_calculated
            overridden = False
            if existing is not None and existing.is_overridden:
                final = Decimal(str(existing.net_salary_final))
                overridden = True
            record_notes = notes if notes is not None else (existing.notes if existing else "")

            record = self._build(employee_id, period, inputs, computed, final, overridden, record_notes)
            try:
                return self._payrolls.upsert(record, expected_version=existing.version if existing else 0)
            except ConcurrentUpdateError:
                if attempt >= _MAX_MERGE_ATTEMPTS:
                    raise
                logger.info("payroll %s %s changed during recalculation (attempt %d)", employee_id, period, attempt)

    def run_month(
        self,
        employees: Iterable[Employee],
        batch: BatchSummaryResult,
        *,
        bonuses: Optional[Mapping[str, Any]] = None,
        deductions: Optional[Mapping[str, Any]] = None,
    ) -> PayrollBatchResult:
        """Recalculate every employee's record for the batch period; failures are collected."""
        bonuses = bonuses or {}
        deductions = deductions or {}
        result = PayrollBatchResult(period=batch.period)

        for emp in employees:
            summary = batch.summaries.get(emp.employee_id)
            if summary is None:
                result.errors[emp.employee_id] = batch.errors.get(emp.employee_id, "no summary")
                continue
            try:
                inputs = self.prepare_inputs(
                    emp,
                    summary,
                    bonus=bonuses.get(emp.employee_id, 0),
                    deductions=deductions.get(emp.employee_id, 0),
                )
                result.records[emp.employee_id] = self.recalculate(
                    employee_id=emp.employee_id,
                    period=batch.period,
                    hourly_rate=inputs.hourly_rate,
                    total_work_hours=inputs.total_work_hours,
                    bonus=inputs.bonus,
                    deductions=inputs.deductions,
                )
            except DomainError as exc:
                logger.error("payroll for employee %s %s failed: %s", emp.employee_id, batch.period, exc)
                result.errors[emp.employee_id] = str(exc)
        return result

    def _build(
        self,
        employee_id: str,
        period: Period,
        inputs: PayrollInput,
        computed: PayrollComputation,
        final: Decimal,
        overridden: bool,
        notes: str,
    ) -> PayrollRecord:
        return PayrollRecord(
            employee_id=employee_id,
            period=period,
            hourly_rate_used=float(inputs.hourly_rate),
            total_work_hours=float(inputs.total_work_hours),
            base_salary=float(computed.base_salary),
            bonus=float(round_money(inputs.bonus)),
            deductions=float(round_money(inputs.deductions)),
            net_salary_calculated=float(computed.net_salary_calculated),
            net_salary_final=float(final),
            is_overridden=overridden,
            notes=(notes or "").strip(),
            updated_at=self._clock(),
        )


@dataclass(frozen=True)
class AnnualPayrollRow:
    employee_id: str
    full_name: str
    monthly_net_salaries: tuple[Optional[float], ...]
    total_work_hours: float
    total_leave_days: int
    total_net_salary: float


@dataclass(frozen=True)
class ReportData:
    year: int
    rows: list[AnnualPayrollRow]
    errors: dict[str, str]


class PayrollReportService:
    """Annual payroll report: monthly finals, yearly hours and approved leave days."""

    def __init__(self, payrolls: PayrollRepository, leaves: LeaveRequestRepository):
        self._payrolls = payrolls
        self._leaves = leaves

    def build_annual_report(self, year: int, employees: Iterable[Employee]) -> ReportData:
        year = int(year)
        year_start = date(year, 1, 1)
        year_end = date(year, 12, 31)
        rows: list[AnnualPayrollRow] = []
        errors: dict[str, str] = {}

        for emp in employees:
            try:
                records = self._payrolls.list_for_year(employee_id=emp.employee_id, year=year)
                leaves = self._leaves.list_for_employee(
                    employee_id=emp.employee_id, status=LeaveStatus.APPROVED, start=year_start, end=year_end
                )
            except DomainError as exc:
                logger.error("annual report for employee %s %s failed: %s", emp.employee_id, year, exc)
                errors[emp.employee_id] = str(exc)
                continue

            monthly: list[Optional[float]] = [None] * 12
            for rec in records:
                if rec.period.year == year:
                    monthly[rec.period.month - 1] = rec.net_salary_final

            total_hours = round_money(sum((Decimal(str(r.total_work_hours)) for r in records), Decimal("0")))
            total_net = round_money(sum((Decimal(str(m)) for m in monthly if m is not None), Decimal("0")))
            leave_days = sum(
                overlap_days(r.start_date, r.end_date, year_start, year_end) for r in leaves if r.approved
            )

            rows.append(
                AnnualPayrollRow(
                    employee_id=emp.employee_id,
                    full_name=emp.full_name,
                    monthly_net_salaries=tuple(monthly),
                    total_work_hours=float(total_hours),
                    total_leave_days=leave_days,
                    total_net_salary=float(total_net),
                )
            )

        rows.sort(key=lambda r: r.total_net_salary, reverse=True)
        return ReportData(year=year, rows=rows, errors=errors)


def _as_period(period: Period | str) -> Period:
    if isinstance(period, Period):
        return period
    return Period.parse(period)


def _key(employee_id: str) -> str:
    key = str(employee_id or "").strip()
    if not key:
        raise ValidationError("Employee is required", errors={"employee_id": "required"})
    return key
