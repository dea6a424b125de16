from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Union

DateLike = Union[date, datetime]


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def calendar_day(value: DateLike) -> date:
    """The date a date/datetime falls on; ranges are compared at day granularity."""
    if isinstance(value, datetime):
        return value.date()
    return value


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive; nothing if end < start."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def weekday_index(value: date) -> int:
    """Weekday with Sunday=0 ... Saturday=6 (the convention weekend settings use)."""
    return (value.weekday() + 1) % 7
