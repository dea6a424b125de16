from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date

from ..core.exceptions import ValidationError

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class Period:
    """One calendar month, the only aggregation granularity used by summaries and payroll."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= int(self.month) <= 12:
            raise ValidationError("Month must be between 1 and 12", errors={"month": "out of range"})
        if not 1 <= int(self.year) <= 9999:
            raise ValidationError("Year is out of range", errors={"year": "out of range"})

    @classmethod
    def parse(cls, value: str) -> "Period":
        """Parse a ``YYYY-MM`` label."""
        m = _PERIOD_RE.match((value or "").strip())
        if not m:
            raise ValidationError("Period must be in YYYY-MM format", errors={"period": "invalid format"})
        return cls(year=int(m.group(1)), month=int(m.group(2)))

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        return date(self.year, self.month, self.length)

    @property
    def length(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return self.label
