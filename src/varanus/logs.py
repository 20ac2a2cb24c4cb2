"""Console logging setup."""

from __future__ import annotations

import logging
import time

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

# Indexed by the numeric log_level setting.
LOG_LEVELS = (
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)

_formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
_formatter.converter = time.gmtime


def level_for(log_level: int) -> int:
    """Map a 0-4 config level onto a :mod:`logging` level, clamping outliers."""
    return LOG_LEVELS[min(max(log_level, 0), len(LOG_LEVELS) - 1)]


def configure_logging(log_level: int = 1) -> None:
    """Install the UTC console handler once and apply *log_level*.

    Safe to call again after the configuration is loaded; only the level
    changes on later calls.
    """
    logging.addLevelName(logging.CRITICAL, "SEVERE")
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_formatter)
        root.addHandler(handler)
    root.setLevel(level_for(log_level))
