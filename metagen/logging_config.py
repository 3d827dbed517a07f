"""Logging setup shared by the generator modules."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_ROOT_LOGGER = "metagen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``metagen`` hierarchy."""
    if name == "__main__":
        name = f"{_ROOT_LOGGER}.main"
    elif not name.startswith(_ROOT_LOGGER):
        name = f"{_ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> None:
    """Attach a single stderr handler to the package logger.

    Calling this more than once replaces the handler instead of stacking them.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
