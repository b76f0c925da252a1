"""Logging configuration for unipatch."""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "unipatch"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int = logging.WARNING, stream: TextIO | None = None) -> logging.Logger:
    """
    Attach a formatted stream handler to the `unipatch` logger.

    Propagation is turned off so records are not printed twice when the
    host application configures the root logger as well.
    """
    logger = logging.getLogger(LOGGER_NAME)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
