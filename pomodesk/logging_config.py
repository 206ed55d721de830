"""Logging setup for the ``pomodesk`` logger tree."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger.

    ``POMODESK_LOG_LEVEL`` in the environment wins over *level*.
    Calling this again only changes the level.
    """
    level = os.environ.get("POMODESK_LOG_LEVEL", level).upper()
    logger = logging.getLogger("pomodesk")
    logger.setLevel(getattr(logging, level, logging.INFO))
    if not any(getattr(h, "_pomodesk", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pomodesk = True
        logger.addHandler(handler)
    return logger
