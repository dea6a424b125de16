"""Settings shared by every environment module."""

import os


def _weekend_days(raw: str) -> tuple:
    return tuple(int(part) for part in raw.split(",") if part.strip())


class Config:
    # Database
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "hr_db")

    # Reconciliation defaults, used when the settings table has no value
    DEFAULT_LATE_CUTOFF = os.environ.get("DEFAULT_LATE_CUTOFF", "07:30")
    DEFAULT_WEEKEND_DAYS = _weekend_days(os.environ.get("DEFAULT_WEEKEND_DAYS", "5,6"))
    STANDARD_WORKDAY_HOURS = float(os.environ.get("STANDARD_WORKDAY_HOURS", "8"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))


def db_config() -> dict:
    return {
        "host": Config.DB_HOST,
        "port": Config.DB_PORT,
        "user": Config.DB_USER,
        "password": Config.DB_PASSWORD,
        "database": Config.DB_NAME,
    }
