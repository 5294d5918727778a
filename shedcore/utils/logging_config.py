"""Logging setup shared by the engine and the HTTP host."""

from __future__ import annotations
import logging
import sys

ROOT_LOGGER = "shedcore"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure(level: int | str = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Attach a single stdout handler to the package logger.

    Safe to call more than once; the previous handler is replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Get a module logger, typically called with __name__."""
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level)
    return logger
