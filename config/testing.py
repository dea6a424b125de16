import os

from .config import Config

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_db_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DEFAULT_LATE_CUTOFF = "07:30"
DEFAULT_WEEKEND_DAYS = (5, 6)
STANDARD_WORKDAY_HOURS = Config.STANDARD_WORKDAY_HOURS

AUTO_INIT_DB = False
