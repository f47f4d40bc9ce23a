"""Pre-DB bootstrap configuration.

Stores preferences that must be known before opening the DB (db_folder, the
user id the dashboard loads accounts for, log level) and the engine limits.
Config lives in ~/.cashflow/config.json to avoid a bootstrapping problem.
"""
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from utils.constants import (
    DEFAULT_USER_ID, LEDGER_DISPLAY_LIMIT, PROJECTION_UPCOMING_LIMIT, RECURRENCE_MAX_STEPS,
)

CONFIG_DIR = Path.home() / ".cashflow"
CONFIG_FILE = CONFIG_DIR / "config.json"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSettings:
    recurrence_max_steps: int = RECURRENCE_MAX_STEPS
    projection_upcoming_limit: int = PROJECTION_UPCOMING_LIMIT
    ledger_display_limit: int = LEDGER_DISPLAY_LIMIT


def load_config() -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, exc)
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict) -> None:
    """Creates ~/.cashflow/ if needed; atomic write via .tmp + os.replace()."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    tmp = CONFIG_FILE.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, CONFIG_FILE)
    except OSError as exc:
        logger.warning("Could not save config %s: %s", CONFIG_FILE, exc)
        tmp.unlink(missing_ok=True)


def get_db_folder() -> str | None:
    """Return config["db_folder"] or None if not set."""
    return load_config().get("db_folder")


def get_user_id() -> str:
    return str(load_config().get("user_id") or DEFAULT_USER_ID)


def get_log_level() -> str:
    return str(load_config().get("log_level") or "INFO").upper()


def load_engine_settings(config: dict | None = None) -> EngineSettings:
    """Build EngineSettings from config, keeping the default for any invalid value."""
    if config is None:
        config = load_config()
    defaults = EngineSettings()
    values = {}
    for name in ("recurrence_max_steps", "projection_upcoming_limit", "ledger_display_limit"):
        raw = config.get(name)
        if raw is None:
            continue
        if isinstance(raw, int) and not isinstance(raw, bool) and raw > 0:
            values[name] = raw
        else:
            logger.warning(
                "Invalid %s=%r in config, using %d", name, raw, getattr(defaults, name)
            )
    return EngineSettings(**values)
