from __future__ import annotations

from datetime import date
from typing import Iterable, Iterator

from ..common.datetime_utils import iter_days
from .model import Holiday, WeekendConfig


def _as_dates(values: Iterable[date | Holiday]) -> set[date]:
    out: set[date] = set()
    for v in values:
        out.add(v.holiday_date if isinstance(v, Holiday) else v)
    return out


def iter_work_days(
    start: date,
    end: date,
    *,
    weekend: WeekendConfig,
    holidays: Iterable[date | Holiday] = (),
    leave_days: Iterable[date] = (),
) -> Iterator[date]:
    """Days in [start, end] that are not weekend, not holiday and not approved leave."""
    skip = _as_dates(holidays) | set(leave_days)
    for day in iter_days(start, end):
        if weekend.is_weekend(day) or day in skip:
            continue
        yield day


def count_work_days(
    start: date,
    end: date,
    *,
    weekend: WeekendConfig,
    holidays: Iterable[date | Holiday] = (),
    leave_days: Iterable[date] = (),
) -> int:
    if len(weekend.days_of_week) >= 7:
        return 0
    return sum(1 for _ in iter_work_days(start, end, weekend=weekend, holidays=holidays, leave_days=leave_days))
