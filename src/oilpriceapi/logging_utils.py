"""Debug logging setup for the client."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "oilpriceapi"
LOG_FORMAT = "[OilPriceAPI %(asctime)s] %(message)s"


def setup_logger(debug: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling it again only adjusts the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    if not any(getattr(handler, "_oilpriceapi", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._oilpriceapi = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
