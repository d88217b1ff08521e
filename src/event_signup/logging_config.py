"""Logging for the Event Signup server.

Routine records (registrations saved, fields edited) go to stdout and
anything at WARNING or above goes to stderr, so a container platform can
tell failures apart from traffic.
"""

import logging
import sys
from typing import Optional, TextIO

from event_signup.config import config

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

# Libraries whose INFO output drowns out the app's own records
QUIET_LOGGERS = ("sqlalchemy.engine", "httpx")


class BelowLevelFilter(logging.Filter):
    """Pass only records below the given level"""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno < self.level


def _stream_handler(
    stream: TextIO, min_level: int, below: Optional[int] = None
) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(min_level)
    if below is not None:
        handler.addFilter(BelowLevelFilter(below))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(level_name: Optional[str] = None) -> logging.Logger:
    """
    Install the stdout/stderr split on the root logger.

    Args:
        level_name: Level to use instead of the configured LOG_LEVEL

    Returns:
        The configured root logger
    """
    level_name = level_name or config.get("log_level", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Calling twice (e.g. on reload) must not duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(
        _stream_handler(sys.stdout, logging.DEBUG, below=logging.WARNING)
    )
    root_logger.addHandler(_stream_handler(sys.stderr, logging.WARNING))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
