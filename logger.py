"""Logging configuration for the reminder assistant.

Owners are WhatsApp numbers and reminder texts are personal, so every
record passes through the log sanitizer before any handler sees it.
"""

import logging
import sys
from datetime import datetime

from config import LOG_DIR, LOG_LEVEL
from utils.log_sanitizer import sanitize_log


class SanitizingFilter(logging.Filter):
    """Mask phone numbers and secrets in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = sanitize_log(record.getMessage())
        record.args = None
        return True


def setup_logging() -> logging.Logger:
    """Set up the "lembrete" logger: dated file, console when interactive."""
    logger = logging.getLogger("lembrete")
    logger.setLevel(LOG_LEVEL)

    # Clear any existing handlers
    logger.handlers.clear()
    logger.filters.clear()
    logger.addFilter(SanitizingFilter())

    # One file per day, e.g. logs/2025-09-03.log
    log_file = LOG_DIR / f"{datetime.now().strftime('%Y-%m-%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(module)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(file_handler)

    if sys.stdout is not None and sys.stdout.isatty():
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        logger.addHandler(console_handler)

    return logger


# Global logger instance
logger = setup_logging()
