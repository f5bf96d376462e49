"""Logging for the ``finance_tracker`` package.

Library modules call ``get_logger("finance_tracker.<module>")`` and never
attach handlers themselves; until the CLI calls :func:`configure_logging` the
package logger only carries a ``NullHandler``.

The level comes from the ``--log-level`` CLI option, else from
``FINANCE_TRACKER_LOG_LEVEL``, else ``INFO``.
"""

from __future__ import annotations

import logging
import os

PACKAGE_LOGGER = "finance_tracker"
LOG_LEVEL_ENV = "FINANCE_TRACKER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured = False


def resolve_level(name: str | None = None) -> int:
    """Map a level name (``debug``, ``WARNING``, ...) to its numeric value.

    Falls back to the environment and then ``INFO``; unknown names are INFO.
    """

    raw = name or os.getenv(LOG_LEVEL_ENV) or ""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None) -> None:
    """Send package logs to stderr. Later calls are no-ops."""

    global _configured
    if _configured:
        return

    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(level))
    # Records stay out of the root logger so host apps don't print them twice.
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
