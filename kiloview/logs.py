"""Logging setup.

The screen belongs to the viewer while raw mode is active, so log records go
to a file in the platform log directory instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "kiloview"
LOG_FILENAME = "kiloview.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(level: str = "WARNING", path: Path | None = None) -> logging.Handler:
    """Attach one handler to the ``kiloview`` logger and return it.

    If the log file cannot be opened a ``NullHandler`` is installed instead.
    """
    root = logging.getLogger(APP_NAME)
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()

    target = path if path is not None else default_log_path()
    handler: logging.Handler
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return handler
