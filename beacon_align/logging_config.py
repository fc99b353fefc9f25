"""
Console and file output for the beacon_align loggers.

Every module logs through logging.getLogger(__name__), so all output hangs
off the package logger configured here.
"""

import logging
import sys
from typing import List, Optional, TextIO

from .config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, PACKAGE_LOGGER

# Handlers attached by the last setup_logging() call
_installed: List[logging.Handler] = []


def setup_logging(level: int = LOG_LEVEL, log_file: Optional[str] = None,
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Send package log records to a stream and, optionally, a file.

    Calling again swaps out the handlers from the previous call; handlers
    attached by the host application stay in place.

    Args:
        level: Threshold for the package logger and its handlers
        log_file: Path of a log file, truncated on each setup
        stream: Console stream (stdout if omitted)

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    while _installed:
        old = _installed.pop()
        logger.removeHandler(old)
        old.close()

    targets: List[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file:
        targets.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in targets:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _installed.append(handler)
    logger.setLevel(level)

    logger.debug(f"Logging to {len(targets)} handler(s) at {logging.getLevelName(level)}")
    return logger
