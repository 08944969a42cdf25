# Path: config/log_setup.py
# Purpose: Configure process-wide logging for host entry points.
# Layer: config.
# Details: Core modules only create named loggers; handlers are installed here once at startup.

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: str | int = "INFO") -> None:
    """Install a single stream handler on the root logger and set its level."""

    global _handler

    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    if _handler is not None and _handler in root.handlers:
        return
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)


__all__ = ["LOG_FORMAT", "configure_logging"]
