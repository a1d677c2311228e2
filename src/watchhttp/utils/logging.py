"""Logging setup for watchhttp.

Only the ``watchhttp`` logger is configured; uvicorn keeps its own
handlers for access and server logs.
"""

from __future__ import annotations

import logging
import sys

from watchhttp.config.settings import LoggingConfig

LOGGER_NAME = "watchhttp"


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Point the ``watchhttp`` logger at stderr and the optional log file.

    Safe to call repeatedly: handlers from a previous call are closed and
    replaced, so messages are never emitted twice.

    Args:
        config: Logging section of the settings. Defaults to INFO on stderr.
    """
    config = config or LoggingConfig()

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    formatter = logging.Formatter(config.format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.file:
        handlers.append(logging.FileHandler(config.file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %d handler(s) at %s", len(handlers), config.level)
    return logger
