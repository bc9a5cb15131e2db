"""Logging setup for the ``cmdetect`` logger tree.

Progress goes to stderr by default because stdout carries the JSON report.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_NAME = "cmdetect"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: Optional[logging.StreamHandler] = None


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a level; ``verbose`` wins over ``quiet``."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a single handler to the ``cmdetect`` logger and set its level.

    Safe to call repeatedly: the level is always updated and the handler's
    stream is swapped when ``stream`` is given.
    """
    global _handler
    logger = logging.getLogger(ROOT_NAME)
    if _handler is None:
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(_handler)
        logger.propagate = False
    elif stream is not None:
        _handler.setStream(stream)
    logger.setLevel(level_for(verbose, quiet))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``cmdetect.<name>``; records flow to the handler set up above."""
    return logging.getLogger(f"{ROOT_NAME}.{name}")
