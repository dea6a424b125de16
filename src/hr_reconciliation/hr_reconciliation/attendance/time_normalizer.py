"""Time-of-day parsing for raw attendance punches.

Attendance sources hand us check-in/out times as free-form strings
(``"7:45"``, ``"07:45:00"``, ``"7:45 PM"``) or as driver values
(``time``/``timedelta``). Everything is reduced to minutes since midnight so
punches can be compared and subtracted.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta
from typing import Any, Optional

from ..core.constants import MINUTES_PER_DAY

_TIME_RE = re.compile(
    r"^(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?\s*(?P<meridiem>[ap]m)?$",
    re.IGNORECASE,
)


def parse_time_of_day(value: Any) -> Optional[int]:
    """Return minutes since midnight (0-1439), or None when the value is unparsable.

    Never raises: callers treat None as "lateness unknown" without dropping presence.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.hour * 60 + value.minute
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if isinstance(value, timedelta):
        # MySQL TIME columns come back as timedelta.
        seconds = int(value.total_seconds())
        if seconds < 0 or seconds >= MINUTES_PER_DAY * 60:
            return None
        return seconds // 60

    if not isinstance(value, str):
        return None

    m = _TIME_RE.match(value.strip())
    if not m:
        return None

    hour = int(m.group("hour"))
    minute = int(m.group("minute"))
    second = int(m.group("second") or 0)
    meridiem = (m.group("meridiem") or "").lower()

    if minute > 59 or second > 59:
        return None

    if meridiem:
        if not 1 <= hour <= 12:
            return None
        if meridiem == "am":
            hour = 0 if hour == 12 else hour
        elif hour < 12:
            hour += 12
    elif hour > 23:
        return None

    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    """Minutes since midnight (or a duration) as HH:MM."""
    minutes = int(minutes)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
