# core/logger.py
import logging

from barista_client.config.settings import settings


def setup_logger(name: str = "barista_client") -> logging.Logger:
    """
    Return a named package logger with the level from settings.

    Only the named logger is touched: output handlers belong to the host
    application, so the logger gets a NullHandler and propagates to whatever
    the host configured on root.
    """
    level_name = (settings.log_level or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(name)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())

    logger.setLevel(level)
    logger.propagate = True

    return logger
