"""Logging setup shared by all simulator components."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_default_level = logging.INFO
_logger_names = set()


def set_default_level(level: str) -> None:
    """Set the level for loggers created without an explicit level.

    Loggers already created through ``setup_logger`` are updated too.

    Args:
        level: Level name, e.g. "DEBUG" or "INFO"
    """
    global _default_level
    _default_level = getattr(logging, level.upper(), logging.INFO)
    for name in _logger_names:
        logging.getLogger(name).setLevel(_default_level)


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Create (or fetch) a configured logger.

    Calling this twice with the same name returns the same logger without
    attaching a second handler.

    Args:
        name: Logger name
        level: Optional level name; defaults to the package-wide level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    _logger_names.add(name)

    if level is not None:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    else:
        logger.setLevel(_default_level)

    return logger
