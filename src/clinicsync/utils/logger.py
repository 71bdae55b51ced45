# src/clinicsync/utils/logger.py
import logging
import sys
from typing import Optional

from clinicsync.core.config import settings


def setup_logger(
    name: str,
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    datefmt: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a named logger for one component of the core.

    Args:
        name: Logger name, upper-case component tag (e.g. "CASCADE_SERVICE")
        level: Logging level (default: DEBUG when settings.DEBUG, else INFO)
        format_string: Custom format string for log messages
        datefmt: Custom date format string

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(f"clinicsync.{name}")

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    if level is None:
        level = logging.DEBUG if settings.DEBUG else logging.INFO
    logger.setLevel(level)

    if format_string is None:
        format_string = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"

    if datefmt is None:
        datefmt = "%Y-%m-%d %H:%M:%S"

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string, datefmt=datefmt))
    logger.addHandler(console_handler)

    # Keep records out of the root logger so uvicorn does not print them twice
    logger.propagate = False

    return logger
