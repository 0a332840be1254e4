"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)` using
`event_name key=value` messages; this only decides where they go.
"""

from __future__ import annotations

import logging
import os
import sys

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def log_level() -> int:
    raw = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    global _handler
    root = logging.getLogger()
    root.setLevel(log_level())

    # Prevent duplicate handlers on repeated calls (e.g. tests, reloads).
    if _handler is not None:
        return None

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(_handler)
