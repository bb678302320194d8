"""Logging setup for plansync CLI runs.

Pipeline modules log through ``logging.getLogger(__name__)``; this only
configures the root handler once per process.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# requests' transport logs every connection at DEBUG
QUIET_LOGGERS = ("urllib3",)


def setup_logging(level: str = "INFO") -> None:
    """Log to stdout at `level`, a standard level name such as "DEBUG"."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.INFO))
