"""Console logging for the runner."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "taskrun"


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the taskrun logger.

    Safe to call more than once: earlier handlers are replaced, not stacked.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.propagate = False
    return logger
