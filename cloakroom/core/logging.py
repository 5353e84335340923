"""JSON logger setup shared by every module."""

import logging
from pythonjsonlogger import jsonlogger

from cloakroom.core.config import get_settings


def get_logger(name: str) -> logging.Logger:
    """Configure a JSON logger once and reuse it."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        "%(levelname)s %(name)s %(message)s %(asctime)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(get_settings().LOG_LEVEL.upper())
    logger.propagate = False
    return logger
