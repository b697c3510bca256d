"""Logging setup for the ``kbbco_games`` logger tree."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Send ``kbbco_games`` log records to stderr at ``level``."""
    logger = logging.getLogger("kbbco_games")
    logger.setLevel(level)
    logger.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger(name: str = "kbbco_games") -> logging.Logger:
    return logging.getLogger(name)
