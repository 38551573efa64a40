"""
Structured Logging Configuration Module

Provides JSON-formatted logging for business transactions. Modules log
through logging.getLogger(__name__); setup_logging() attaches the handler
to the package logger once, from the CLI or the Flask app factory.
"""

import json
import logging
from datetime import datetime, timezone

from soundgood.config import config

# Identifiers passed through `extra=` by the services.
CONTEXT_FIELDS = ("operation", "acct_no", "instrument_id", "student_id")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = None, logger_name: str = "soundgood") -> logging.Logger:
    """
    Setup structured JSON logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL); config.log_level by default
        logger_name: Name of the logger

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or config.log_level).upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger
