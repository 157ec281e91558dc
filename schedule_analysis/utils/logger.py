"""Logging configuration."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = 'INFO') -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level name, e.g. ``'INFO'`` or ``'DEBUG'``

    Returns:
        The ``schedule_analysis`` logger
    """
    logger = logging.getLogger('schedule_analysis')
    logger.setLevel(level.upper())

    # Avoid stacking handlers when called more than once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
