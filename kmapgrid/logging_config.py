"""Logger setup for the K-map page and its solver."""
import logging
import sys
from typing import List, Optional

from .config import LOG_DATE_FORMAT, LOG_FORMAT, log_file_from_env, log_level_from_env

PACKAGE_LOGGER = "kmapgrid"


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    return handlers


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'kmapgrid' logger and return it.

    Args:
        level: Logging level; KMAPGRID_LOG_LEVEL when omitted.
        log_file: File that solve logs are appended to; KMAPGRID_LOG_FILE when omitted.
    """
    level = log_level_from_env() if level is None else level
    log_file = log_file_from_env() if log_file is None else log_file

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in _build_handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("kmapgrid logging at %s%s", logging.getLevelName(level),
                 f", appending to {log_file}" if log_file else "")
    return logger
