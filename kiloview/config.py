"""JSON config helpers.

Stores the tab stop, status message lifetime, and log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .rows import TAB_STOP
from .state import STATUS_MESSAGE_SECONDS

APP_NAME = "kiloview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
MAX_TAB_STOP = 32
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class ViewerSettings:
    tab_stop: int = TAB_STOP
    status_message_seconds: float = STATUS_MESSAGE_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_tab_stop(data: dict[str, object]) -> int:
    value = data.get("tab_stop")
    if isinstance(value, bool) or not isinstance(value, int):
        return TAB_STOP
    if value < 1 or value > MAX_TAB_STOP:
        return TAB_STOP
    return value


def _load_status_message_seconds(data: dict[str, object]) -> float:
    value = data.get("status_message_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return STATUS_MESSAGE_SECONDS
    if value <= 0:
        return STATUS_MESSAGE_SECONDS
    return float(value)


def _load_log_level(data: dict[str, object]) -> str:
    value = data.get("log_level")
    if not isinstance(value, str):
        return DEFAULT_LOG_LEVEL
    name = value.strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name


def load_settings() -> ViewerSettings:
    data = load_config()
    return ViewerSettings(
        tab_stop=_load_tab_stop(data),
        status_message_seconds=_load_status_message_seconds(data),
        log_level=_load_log_level(data),
    )
