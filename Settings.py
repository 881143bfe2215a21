"""Persistent editor settings stored as JSON in the user's home directory."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from EditorLogic import DEFAULT_TAB_WIDTH

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".blockpad.json"

DEFAULTS: Dict[str, Any] = {
    "theme": "dark",
    "show_calltips": True,
    "font_size": 13,
    "word_wrap": True,
    "tab_width": DEFAULT_TAB_WIDTH,
    "calltip_timeout_ms": 2500,
}


INT_KEYS = ("tab_width", "font_size", "calltip_timeout_ms")


def positive_int(value: Any, default: int) -> int:
    """value as a positive int, or default when it is not a whole positive number."""
    if isinstance(value, bool):
        return default
    if isinstance(value, float) and not value.is_integer():
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


def normalize_tab_width(value: Any) -> int:
    """Positive integer tab width, DEFAULT_TAB_WIDTH for anything else."""
    return positive_int(value, DEFAULT_TAB_WIDTH)


def load_settings(path: Path = SETTINGS_PATH) -> Dict[str, Any]:
    """Load settings from disk. Missing keys are filled from DEFAULTS."""
    data: Dict[str, Any] = {}
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as fh:
                loaded = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        else:
            if isinstance(loaded, dict):
                data = loaded
            else:
                logger.warning("Ignoring settings file %s: expected an object", path)

    for key, value in DEFAULTS.items():
        data.setdefault(key, value)

    for key in INT_KEYS:
        raw = data[key]
        number = positive_int(raw, DEFAULTS[key])
        if type(raw) is not int or number != raw:
            logger.warning("Invalid %s %r in %s, using %d", key, raw, path, number)
        data[key] = number
    return data


def save_settings(settings: Dict[str, Any], path: Path = SETTINGS_PATH) -> None:
    try:
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(settings, fh, indent=2)
    except OSError:
        logger.exception("Could not write settings to %s", path)
        raise
