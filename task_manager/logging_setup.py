"""
Logging setup - stdlib logging with one console handler.
Call once, early, from the app factory.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger. Safe to call repeatedly (handlers are not duplicated)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_task_manager", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._task_manager = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    # Uvicorn access log duplicates the request middleware line
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
