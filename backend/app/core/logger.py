"""
Logging setup shared by services and repositories.
"""

import logging
import sys

from app.core.config import get_settings

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a module logger with the application's handler and level.

    Calling it twice for the same name does not add a second handler.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(get_settings().LOG_LEVEL.upper())
    return logger
