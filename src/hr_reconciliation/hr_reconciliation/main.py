from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv

from config import get_settings_module

from .attendance.time_normalizer import parse_time_of_day
from .container import Container, build_container
from .core.exceptions import ValidationError
from .database.bootstrap import apply_schema, list_tables

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _cutoff_minutes(value) -> int:
    minutes = parse_time_of_day(value)
    if minutes is None:
        raise ValidationError(f"DEFAULT_LATE_CUTOFF is not a time of day: {value!r}")
    return minutes


def create_container() -> Container:
    """Load settings (APP_ENV + .env), configure logging and wire services."""
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    debug = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "DEBUG" if debug else "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    engine_settings = {
        "DEFAULT_LATE_CUTOFF": _cutoff_minutes(getattr(settings, "DEFAULT_LATE_CUTOFF", "07:30")),
        "DEFAULT_WEEKEND_DAYS": tuple(getattr(settings, "DEFAULT_WEEKEND_DAYS", (5, 6))),
        "STANDARD_WORKDAY_HOURS": float(getattr(settings, "STANDARD_WORKDAY_HOURS", 8)),
    }
    return build_container(db_config=db_config, engine_settings=engine_settings)
