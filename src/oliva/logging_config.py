"""Structured JSON logging configuration.

Configures Python stdlib logging to emit one JSON object per record on stdout,
with ``severity``/``timestamp``/``logger`` field names.

Usage:
    from oliva.logging_config import configure_logging
    configure_logging()
"""

import logging
import logging.config

from oliva.config import get_settings

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "oliva",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str | None = None) -> None:
    """Apply structured JSON logging configuration.

    Call once at application startup (e.g., in the FastAPI lifespan).
    ``level`` defaults to ``settings.log_level``.
    """
    config = {**LOGGING_CONFIG, "root": {**LOGGING_CONFIG["root"]}}
    config["root"]["level"] = (level or get_settings().log_level).upper()
    logging.config.dictConfig(config)
