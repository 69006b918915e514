"""Logging configuration for the application."""

import logging
import sys

from portal_rbac.core.config import get_settings


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. Cache
    hits and misses are logged at DEBUG; degraded infrastructure at WARNING.
    Output goes to stdout.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # redis-py logs every reconnect attempt at DEBUG; keep our own DEBUG readable.
    logging.getLogger("redis").setLevel(max(log_level, logging.INFO))

