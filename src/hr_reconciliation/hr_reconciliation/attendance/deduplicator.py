"""Collapse repeated punches into one presence fact per employee-day.

Rules:
- an employee is present on a day if any punch carries a non-blank check-in;
- lateness comes from the earliest readable check-in only, so later re-punches
  never change the verdict;
- punches whose check-in cannot be read sort after readable ones, keeping
  source order among themselves;
- worked minutes are latest readable check-out minus earliest readable
  check-in, or 0 when that is not positive.
"""

from __future__ import annotations

from collections import OrderedDict
from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from .factory import AttendanceStrategyFactory
from .model import AttendanceEvent, PresenceFact, normalize_badge
from .time_normalizer import parse_time_of_day

_DEFAULT_FACTORY = AttendanceStrategyFactory()


def order_by_check_in(events: Iterable[AttendanceEvent]) -> list[AttendanceEvent]:
    """Events with a readable check-in first (earliest first), then the rest in source order."""
    indexed = list(enumerate(events))

    def key(item: tuple[int, AttendanceEvent]):
        idx, ev = item
        minutes = parse_time_of_day(ev.check_in)
        if minutes is None:
            return (1, 0, idx)
        return (0, minutes, idx)

    return [ev for _, ev in sorted(indexed, key=key)]


def collapse_day(
    events: Sequence[AttendanceEvent],
    cutoff_minutes: int,
    *,
    work_date: Optional[date] = None,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> PresenceFact:
    """Collapse all punches of one employee on one date."""
    factory = factory or _DEFAULT_FACTORY
    if work_date is None and events:
        work_date = events[0].work_date

    present = any(ev.has_check_in for ev in events)
    if not present:
        return PresenceFact(work_date=work_date, present=False, late=False, status=AttendanceStatus.ABSENT)

    ordered = order_by_check_in(events)
    first_in = parse_time_of_day(ordered[0].check_in)

    check_outs = [m for m in (parse_time_of_day(ev.check_out) for ev in events) if m is not None]
    last_out = max(check_outs) if check_outs else None

    worked = 0
    if first_in is not None and last_out is not None and last_out > first_in:
        worked = last_out - first_in

    strategy = factory.for_checkin(check_in_minutes=first_in, cutoff_minutes=cutoff_minutes)
    decision = strategy.decide_checkin(check_in_minutes=first_in, cutoff_minutes=cutoff_minutes)

    return PresenceFact(
        work_date=work_date,
        present=True,
        late=decision.late,
        status=decision.status,
        first_check_in=first_in,
        last_check_out=last_out,
        worked_minutes=worked,
        note=decision.note,
    )


def collapse_events(
    events: Iterable[AttendanceEvent],
    cutoff_minutes: int,
    *,
    badge: Optional[str] = None,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> dict[date, PresenceFact]:
    """Group punches by date and collapse each day.

    When ``badge`` is given, punches for other badges are ignored.
    """
    wanted = normalize_badge(badge) if badge is not None else None

    by_date: "OrderedDict[date, list[AttendanceEvent]]" = OrderedDict()
    for ev in events:
        if wanted is not None and ev.badge_key != wanted:
            continue
        by_date.setdefault(ev.work_date, []).append(ev)

    return {
        work_date: collapse_day(day_events, cutoff_minutes, work_date=work_date, factory=factory)
        for work_date, day_events in sorted(by_date.items())
    }


def group_by_badge(events: Iterable[AttendanceEvent]) -> dict[str, list[AttendanceEvent]]:
    out: dict[str, list[AttendanceEvent]] = {}
    for ev in events:
        key = ev.badge_key
        if not key:
            continue
        out.setdefault(key, []).append(ev)
    return out
