from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from ..core.constants import DEFAULT_LATE_CUTOFF_MINUTES
from ..workdays.model import CampusWorkingHours
from .time_normalizer import parse_time_of_day

logger = logging.getLogger(__name__)


class CutoffResolver:
    """Resolve the lateness cutoff (minutes since midnight) for a campus.

    The cutoff is the end of the campus check-in window. Campuses without a
    usable row fall back to the global default; the fallback is logged once
    per campus so missing configuration stays visible.
    """

    def __init__(
        self,
        campus_hours: Mapping[str, CampusWorkingHours] | Iterable[CampusWorkingHours] = (),
        *,
        default_minutes: int = DEFAULT_LATE_CUTOFF_MINUTES,
    ):
        if isinstance(campus_hours, Mapping):
            rows = list(campus_hours.values())
        else:
            rows = list(campus_hours)
        self._by_campus = {_campus_key(r.campus): r for r in rows}
        self._default = int(default_minutes)
        self._warned: set[str] = set()

    @property
    def default_minutes(self) -> int:
        return self._default

    def cutoff_for(self, campus: Optional[str]) -> int:
        key = _campus_key(campus)
        row = self._by_campus.get(key)
        if row is None:
            self._warn_once(key, "no working hours configured for campus %r; using default cutoff %s min")
            return self._default

        minutes = parse_time_of_day(row.check_in_end)
        if minutes is None:
            self._warn_once(key, "unreadable check-in window end for campus %r; using default cutoff %s min")
            return self._default
        return minutes

    def _warn_once(self, key: str, message: str) -> None:
        if key in self._warned:
            return
        self._warned.add(key)
        logger.warning(message, key or "<none>", self._default)


def _campus_key(campus: Optional[str]) -> str:
    return (campus or "").strip().lower()
