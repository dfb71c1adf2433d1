"""Package logging for ``purchase_history``.

The CLI calls :func:`configure_logging` once at startup; every other module
only asks for a logger with :func:`get_logger` and never adds handlers, so
the pipeline stays silent when imported as a library.
"""

from __future__ import annotations

import logging
import os
import sys

PACKAGE_LOGGER = "purchase_history"
LEVEL_ENV = "PURCHASE_HISTORY_LOG_LEVEL"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def resolve_level(level: str | None) -> int:
    """Map a level name or number to a ``logging`` level.

    An unrecognized or missing ``level`` falls back to ``PURCHASE_HISTORY_LOG_LEVEL``
    and then to INFO.
    """

    for candidate in (level, os.getenv(LEVEL_ENV)):
        if not candidate:
            continue
        name = candidate.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelNamesMapping().get(name)
        if numeric is not None:
            return numeric
    return logging.INFO


def configure_logging(level: str | None = None) -> None:
    """Send package log records to stderr; later calls are no-ops."""

    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    # The interpreter's own stderr, not a temporarily swapped ``sys.stderr``.
    handler = logging.StreamHandler(sys.__stderr__)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
