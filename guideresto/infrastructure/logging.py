"""
Logging infrastructure.

Provides logging utilities shared by the whole package.
"""
import logging
from typing import Optional

from ..settings import LoggingSettings

PACKAGE_LOGGER = "guideresto"


def get_logger(name: str, settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Get logger instance.

    Args:
        name: Logger name (usually module name)
        settings: Format and level to apply; defaults from the environment

    Returns:
        Logger instance
    """
    settings = settings or LoggingSettings()
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.format))
        logger.addHandler(handler)
        logger.setLevel(settings.level.upper())
    return logger


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """Attach the stream handler to the ``guideresto`` logger tree and set its level."""
    settings = settings or LoggingSettings()
    logger = get_logger(PACKAGE_LOGGER, settings)
    logger.setLevel(settings.level.upper())
    return logger
