"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

# 07:30, used when a campus has no working-hours row.
DEFAULT_LATE_CUTOFF_MINUTES = 7 * 60 + 30

# Sunday=0 ... Saturday=6; Friday and Saturday.
DEFAULT_WEEKEND_DAYS = (5, 6)

DEFAULT_STANDARD_WORKDAY_HOURS = 8
MIN_STANDARD_WORKDAY_HOURS = 1
MAX_STANDARD_WORKDAY_HOURS = 24

MONEY_QUANTUM = "0.01"
