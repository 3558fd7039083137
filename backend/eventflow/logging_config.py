"""Logging configuration for the eventflow backend."""

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Optional

from eventflow.config import LOG_FORMAT, LOG_LEVEL


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
                   Defaults to the LOG_LEVEL env var (INFO).
        log_format: "text" or "json". Defaults to the LOG_FORMAT env var.
    """
    level = (log_level or LOG_LEVEL).upper()
    formatter = "json" if (log_format or LOG_FORMAT) == "json" else "text"

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "eventflow.logging_config.JSONFormatter",
            },
            "text": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(logging_config)
