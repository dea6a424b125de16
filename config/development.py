import os

from .config import Config, db_config

DB_CONFIG = db_config()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEFAULT_LATE_CUTOFF = Config.DEFAULT_LATE_CUTOFF
DEFAULT_WEEKEND_DAYS = Config.DEFAULT_WEEKEND_DAYS
STANDARD_WORKDAY_HOURS = Config.STANDARD_WORKDAY_HOURS

# If enabled, schema.sql is applied on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
