from .config import Config, db_config

DB_CONFIG = db_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

DEFAULT_LATE_CUTOFF = Config.DEFAULT_LATE_CUTOFF
DEFAULT_WEEKEND_DAYS = Config.DEFAULT_WEEKEND_DAYS
STANDARD_WORKDAY_HOURS = Config.STANDARD_WORKDAY_HOURS

AUTO_INIT_DB = Config.AUTO_INIT_DB
