"""
Logging configuration.

Authorization denials are written to the `property_authz.audit` logger with
structured extra fields; the JSON formatter keeps those fields machine
readable for log aggregation.

- LOG_FORMAT=json: JSON lines to stdout
- LOG_FORMAT=console: human-readable output for development
"""

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
    }
)


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs one JSON object per line with timestamp, level, logger, message,
    exception (if any) and an "extra" object for fields passed via `extra=`.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS
        }
        if extras:
            log_entry["extra"] = extras

        return json.dumps(log_entry, default=str)


def get_logging_config(level: str = "INFO", fmt: str = "json") -> dict[str, Any]:
    """
    Build a dictConfig for the application.

    Args:
        level: Root log level name
        fmt: "json" or "console"

    Returns:
        logging.config.dictConfig-compatible dict
    """
    if fmt == "json":
        formatter = {"()": f"{__name__}.JsonFormatter"}
    else:
        formatter = {
            "format": "[{asctime}] {levelname} {name} {message}",
            "style": "{",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {"handlers": ["console"], "level": level},
            "property_authz.audit": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    logging.config.dictConfig(get_logging_config(level.upper(), fmt))
