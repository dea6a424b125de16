from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import (
    DEFAULT_LATE_CUTOFF_MINUTES,
    DEFAULT_STANDARD_WORKDAY_HOURS,
    DEFAULT_WEEKEND_DAYS,
    MAX_STANDARD_WORKDAY_HOURS,
    MIN_STANDARD_WORKDAY_HOURS,
)
from ..core.exceptions import ValidationError
from .model import ReconciliationConfig, WeekendConfig
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Build the immutable configuration snapshot handed to each computation."""

    def __init__(
        self,
        settings: SettingsRepository,
        *,
        default_cutoff_minutes: int = DEFAULT_LATE_CUTOFF_MINUTES,
        default_weekend_days: tuple[int, ...] = DEFAULT_WEEKEND_DAYS,
        default_standard_hours: float = DEFAULT_STANDARD_WORKDAY_HOURS,
    ):
        self._settings = settings
        self._default_cutoff = int(default_cutoff_minutes)
        self._default_weekend = tuple(default_weekend_days)
        self._default_hours = float(default_standard_hours)

    def load_config(self) -> ReconciliationConfig:
        """Read weekend, campus hours and workday hours.

        Missing or invalid weekend/workday values fall back to defaults with a
        warning. A failing store raises DataSourceError: computing with silent
        defaults would misreport absences.
        """
        return ReconciliationConfig(
            weekend=self._load_weekend(),
            campus_hours={row.campus: row for row in self._settings.list_campus_working_hours()},
            default_cutoff_minutes=self._default_cutoff,
            standard_workday_hours=self._load_standard_hours(),
        )

    def _load_weekend(self) -> WeekendConfig:
        default = WeekendConfig.of(self._default_weekend)
        try:
            days = self._settings.get_weekend_days()
            if days is None:
                logger.warning("weekend days not configured; using default %s", list(self._default_weekend))
                return default
            return WeekendConfig.of(days)
        except ValidationError as exc:
            logger.warning("invalid weekend days in settings (%s); using default %s", exc, list(self._default_weekend))
            return default

    def _load_standard_hours(self) -> float:
        try:
            hours: Optional[float] = self._settings.get_standard_workday_hours()
        except ValidationError as exc:
            logger.warning("invalid standard workday hours (%s); using default %s", exc, self._default_hours)
            return self._default_hours
        if hours is None:
            return self._default_hours
        if not MIN_STANDARD_WORKDAY_HOURS <= hours <= MAX_STANDARD_WORKDAY_HOURS:
            logger.warning("invalid standard workday hours %r; using default %s", hours, self._default_hours)
            return self._default_hours
        return hours
