from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollComputation, PayrollInput


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, inputs: PayrollInput) -> PayrollComputation:
        raise NotImplementedError
