"""
Log formatters: JSON, plain text, colored text.

Context passed by the client (method, url, attempt, status, ...) arrives on
the record through ``extra=`` and is rendered next to the message.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Union

from .config import LogFormat

# Attributes every LogRecord has; anything else on a record is context
RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message", "asctime", "taskName",
}


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in RESERVED_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per line, context nested under "context".

    Example output:
        {"ts": "2024-01-15T10:30:45.123+00:00", "level": "WARNING", "logger": "globalpost_client",
         "message": "Retrying GlobalPost request after HTTP error.",
         "context": {"status": 503, "attempt": 1, "channel": "globalpost"}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "context": record_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """
    Format: <time> <LEVEL> <logger>: <message> | key=value ...

    Example output:
        2024-01-15 10:30:45 DEBUG    globalpost_client: GlobalPost request | method=GET attempt=1
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if context:
            line += " | " + " ".join(f"{key}={value}" for key, value in context.items())
        return line


class ColoredFormatter(TextFormatter):
    """Text formatter with the message line colored by level (ANSI)."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;31m",
    }
    RESET = "\033[0m"

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        color = self.LEVEL_COLORS.get(record.levelname)
        return f"{color}{line}{self.RESET}" if color else line


_FORMATTERS = {
    LogFormat.JSON: JSONFormatter,
    LogFormat.TEXT: TextFormatter,
    LogFormat.COLORED: ColoredFormatter,
}


def get_formatter(format_type: Union[str, LogFormat]) -> logging.Formatter:
    """
    Formatter instance for a format name.

    Raises:
        ValueError: unknown format
    """
    if not isinstance(format_type, LogFormat):
        format_type = LogFormat(str(format_type).lower())
    return _FORMATTERS[format_type]()
