from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.period import Period
from ..common.validators import as_non_negative_number
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class PayrollInput:
    """Validated calculator inputs (exact decimals)."""

    hourly_rate: Decimal
    total_work_hours: Decimal
    bonus: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayrollComputation:
    base_salary: Decimal
    net_salary_calculated: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    """Stored salary record, unique per (employee_id, period)."""

    employee_id: str
    period: Period
    hourly_rate_used: float
    total_work_hours: float
    base_salary: float
    bonus: float
    deductions: float
    net_salary_calculated: float
    net_salary_final: float
    is_overridden: bool = False
    notes: str = ""
    version: int = 0
    updated_at: Optional[datetime] = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.employee_id, self.period.label)


def validate_payroll_inputs(
    *,
    hourly_rate: Any,
    total_work_hours: Any,
    bonus: Any = 0,
    deductions: Any = 0,
) -> PayrollInput:
    """Check all four inputs and report every bad field at once."""
    errors: dict[str, str] = {}
    values: dict[str, Decimal] = {}
    for name, raw in (
        ("hourly_rate", hourly_rate),
        ("total_work_hours", total_work_hours),
        ("bonus", bonus),
        ("deductions", deductions),
    ):
        try:
            values[name] = as_non_negative_number(raw, name)
        except ValidationError as exc:
            errors.update(exc.errors or {name: str(exc)})

    if errors:
        raise ValidationError("Invalid payroll input: " + ", ".join(sorted(errors)), errors=errors)
    return PayrollInput(**values)
