"""Logging setup: diagnostics go to stderr, the table owns stdout."""
from __future__ import annotations
import logging
import sys

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)
    value = logging.getLevelName(level.upper())
    root_logger.setLevel(value if isinstance(value, int) else logging.WARNING)
