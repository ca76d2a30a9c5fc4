"""Logging for the batch engine.

Kitchen-floor records carry the event and dish they concern (``event_id``,
``dish_name``, ``direction`` passed as ``extra``). Both formats surface that
context so one dish's history can be followed across requests.
"""

import logging
import sys
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from batch_engine.app.config import get_settings

settings = get_settings()

CONTEXT_FIELDS = ("event_id", "dish_name", "direction")


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class EventJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record; event and dish context at top level."""

    def add_fields(
        self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = settings.app_name
        log_record["environment"] = settings.environment
        log_record.update(record_context(record))

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)


class EventTextFormatter(logging.Formatter):
    """Human-readable line with a trailing ``[event_id=.. dish_name=..]`` tag."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if context:
            line += " [" + " ".join(f"{name}={value}" for name, value in context.items()) + "]"
        return line


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return EventJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", timestamp=True)
    return EventTextFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging() -> logging.Logger:
    """Configure the package logger. Child loggers (getLogger(__name__)) inherit it."""
    logger = logging.getLogger("batch_engine")
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(settings.log_format))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


logger = setup_logging()
