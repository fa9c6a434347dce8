"""Logging configuration for the link shortener."""

import logging
import sys
from typing import Optional


LOGGER_NAME = "link_shortener"

# Placeholder when a record is not about a particular link
NO_SHORTCODE = "-"


class ShortcodeFilter(logging.Filter):
    """Give every record a ``shortcode`` attribute for the formatters.

    Callers tag link-specific messages with ``extra={"shortcode": code}``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "shortcode"):
            record.shortcode = NO_SHORTCODE
        return True


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
) -> logging.Logger:
    """Configure the link shortener logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Emit one JSON object per line instead of plain text

    Returns:
        Configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if json_format:
        formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "shortcode": "%(shortcode)s", "message": "%(message)s"}'
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s [%(shortcode)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        handler.addFilter(ShortcodeFilter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger under the link shortener namespace."""
    return logging.getLogger(name)
