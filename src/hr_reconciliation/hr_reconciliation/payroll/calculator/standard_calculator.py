from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import MONEY_QUANTUM
from ..model import PayrollComputation, PayrollInput
from .base import PayrollCalculator


def round_money(value: Decimal) -> Decimal:
    return value.quantize(Decimal(MONEY_QUANTUM), rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: rate * hours + bonus - deductions, rounded half-up to cents."""

    def compute(self, inputs: PayrollInput) -> PayrollComputation:
        base = inputs.hourly_rate * inputs.total_work_hours
        net = base + inputs.bonus - inputs.deductions
        return PayrollComputation(base_salary=round_money(base), net_salary_calculated=round_money(net))
