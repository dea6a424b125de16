from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.period import Period
from .model import PayrollRecord


class PayrollRepository(Protocol):
    def get(self, *, employee_id: str, period: Period) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def upsert(self, record: PayrollRecord, *, expected_version: Optional[int] = None) -> PayrollRecord:
        """Create or update the record for (employee_id, period) atomically.

        ``expected_version=None`` is last-write-wins. Otherwise the stored
        version must match (0 = must not exist yet) or ConcurrentUpdateError is
        raised. Returns the stored record with its new version.
        """

        raise NotImplementedError

    def list_for_year(self, *, employee_id: str, year: int) -> Sequence[PayrollRecord]:
        raise NotImplementedError
