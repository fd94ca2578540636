"""JSON-based settings persistence for the range picker."""

import json
import logging
import os
from datetime import date

from calendar_logic import SUNDAY, add_months

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-range-picker-settings.json")

_DEFAULTS = {
    "domain_months": 12,
    "first_weekday": SUNDAY,
    "month_label_format": "%B %Y",
    "grid_cols": 4,
    "window_width": None,
    "window_height": None,
    "log_level": "INFO",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing or invalid keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", _SETTINGS_PATH, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", _SETTINGS_PATH)
        return settings

    if _is_int(stored.get("domain_months")) and stored["domain_months"] > 0:
        settings["domain_months"] = stored["domain_months"]
    if _is_int(stored.get("first_weekday")) and 0 <= stored["first_weekday"] <= 6:
        settings["first_weekday"] = stored["first_weekday"]
    if isinstance(stored.get("month_label_format"), str) and stored["month_label_format"]:
        settings["month_label_format"] = stored["month_label_format"]
    for key in ("grid_cols", "window_width", "window_height"):
        if _is_int(stored.get(key)) and stored[key] > 0:
            settings[key] = stored[key]
    level = stored.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        settings["log_level"] = level.upper()
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def domain_bounds(settings: dict, today: date) -> tuple[date, date]:
    """Return the selectable domain: [today, today + domain_months)."""
    return today, add_months(today, settings["domain_months"])


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
