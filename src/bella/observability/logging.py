"""Structured logging configuration for Bella."""

import logging
import logging.config
from typing import Any

DEFAULT_LOG_FILE = "bella.log"


def setup_logging(level: str = "INFO", log_file: str | None = DEFAULT_LOG_FILE) -> None:
    """
    Configure logging for Bella.

    Console output uses a plain formatter; the rotating file handler writes
    one JSON object per record so turns can be filtered by conversation_id.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: JSON log file path, or None to log to the console only
    """
    level = level.upper()
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
                "level": level,
            },
        },
        "loggers": {
            "bella": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    }

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "formatter": "json",
            "level": level,
        }
        config["loggers"]["bella"]["handlers"].append("file")

    logging.config.dictConfig(config)


class ContextLogger:
    """Logger with contextual information."""

    def __init__(self, name: str):
        """
        Initialize context logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def with_context(self, **context: Any) -> logging.LoggerAdapter:
        """
        Add context to log messages.

        Args:
            **context: Context key-value pairs, attached to every record as extras

        Returns:
            LoggerAdapter with context
        """
        return logging.LoggerAdapter(self.logger, context)
