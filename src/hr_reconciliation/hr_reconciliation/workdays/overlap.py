from __future__ import annotations

from datetime import date

from ..common.datetime_utils import DateLike, calendar_day, iter_days


def _clip(range_start: DateLike, range_end: DateLike, period_start: date, period_end: date) -> tuple[date, date]:
    effective_start = max(calendar_day(range_start), calendar_day(period_start))
    effective_end = min(calendar_day(range_end), calendar_day(period_end))
    return effective_start, effective_end


def overlap_days(range_start: DateLike, range_end: DateLike, period_start: date, period_end: date) -> int:
    """Whole days a range (e.g. a leave request) shares with a period, both ends inclusive.

    >>> overlap_days(date(2024, 1, 28), date(2024, 2, 3), date(2024, 2, 1), date(2024, 2, 29))
    3
    """
    effective_start, effective_end = _clip(range_start, range_end, period_start, period_end)
    if effective_start > effective_end:
        return 0
    return (effective_end - effective_start).days + 1


def covered_days(range_start: DateLike, range_end: DateLike, period_start: date, period_end: date) -> set[date]:
    """The dates counted by overlap_days."""
    effective_start, effective_end = _clip(range_start, range_end, period_start, period_end)
    return set(iter_days(effective_start, effective_end))
