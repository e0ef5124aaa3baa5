"""
PdfIntake - Logger Module

This module sets up logging for the application.
"""

import logging

from pdfintake.config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


def setup_logger(
    log_level: int | None = None,
    log_format: str | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """Set up and configure the application logger.

    Args:
        log_level: Logging level to use (default: LOG_LEVEL)
        log_format: Logging format string (default: LOG_FORMAT)
        logger_name: Name for the logger (default: LOGGER_NAME)

    Returns:
        A configured Logger instance
    """
    logging.basicConfig(
        level=log_level or LOG_LEVEL,
        format=log_format or LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
    return logging.getLogger(logger_name or LOGGER_NAME)


def set_log_level(level: int | str) -> None:
    """Change the level of the application logger and the root handler."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = LOG_LEVEL
    logging.getLogger().setLevel(level)
    logger.setLevel(level)


# Singleton logger instance
logger = setup_logger()
