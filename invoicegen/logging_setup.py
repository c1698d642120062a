"""Logging for the ``invoicegen`` package.

The host entrypoint calls ``configure_logging`` once; every other module asks
``get_logger("invoicegen.<module>")`` for a child of the package logger.
"""

from __future__ import annotations

import logging
import sys

from . import config

PACKAGE_LOGGER = "invoicegen"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def level_from_name(level: int | str | None) -> int:
    """``"debug"``, ``"15"`` or ``logging.DEBUG``; unknown values fall back to the configured level."""
    for candidate in (level, config.LOG_LEVEL):
        if isinstance(candidate, int):
            return candidate
        if isinstance(candidate, str):
            name = candidate.strip().upper()
            if name.isdigit():
                return int(name)
            numeric = logging.getLevelName(name)
            if isinstance(numeric, int):
                return numeric
    return logging.INFO


def configure_logging(level: int | str | None = None) -> None:
    """Send package log records to stderr. Later calls do nothing."""
    global _configured
    if _configured:
        return

    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.handlers = [h for h in pkg.handlers if not isinstance(h, logging.NullHandler)]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg.addHandler(handler)
    pkg.setLevel(level_from_name(level))
    pkg.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    pkg = logging.getLogger(PACKAGE_LOGGER)
    # quiet until the host configures logging
    if not _configured and not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)
