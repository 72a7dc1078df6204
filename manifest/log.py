"""Logging setup for manifest entry points."""
from __future__ import annotations

import logging
import sys

LOGGER_NAME = "manifest"
_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(
    level: str = "WARNING",
    log_file: str | None = None,
) -> logging.Logger:
    """Attach one handler to the package logger.

    Logs to log_file when given, stderr otherwise. Calling it again
    only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Don't add handlers if already configured
    if logger.handlers:
        return logger

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT),
    )
    logger.addHandler(handler)
    return logger
