"""
Loggers for GlobalPost client.

The client depends only on the Logger protocol (leveled methods taking a
message and keyword context). Three implementations ship with the package:

- NullLogger: drops everything (client default)
- MemoryLogger: keeps entries in a list (tests, diagnostics)
- GlobalPostLogger: stdlib logging with console/file handlers
"""

import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .config import LoggingConfig
from .formatters import RESERVED_ATTRS
from .handlers import build_handlers
from ...utils.sanitizer import mask_context


class Logger(Protocol):
    """Leveled logging capability injected into GlobalPostClient."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(self, message: str, /, **context: Any) -> None: ...


class NullLogger:
    """Logger that discards every entry."""

    def debug(self, message: str, /, **context: Any) -> None:
        pass

    def info(self, message: str, /, **context: Any) -> None:
        pass

    def warning(self, message: str, /, **context: Any) -> None:
        pass

    def error(self, message: str, /, **context: Any) -> None:
        pass


class MemoryLogger:
    """
    Logger that records entries in memory.

    Example:
        >>> logger = MemoryLogger()
        >>> logger.warning("Retrying", attempt=1)
        >>> logger.messages
        [('warning', 'Retrying', {'attempt': 1})]
    """

    def __init__(self):
        self.messages: List[Tuple[str, str, Dict[str, Any]]] = []

    def log(self, level: str, message: str, /, **context: Any) -> None:
        self.messages.append((level, message, dict(context)))

    def debug(self, message: str, /, **context: Any) -> None:
        self.log('debug', message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self.log('info', message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self.log('warning', message, **context)

    def error(self, message: str, /, **context: Any) -> None:
        self.log('error', message, **context)

    def levels(self) -> List[str]:
        return [level for level, _, _ in self.messages]

    def clear(self) -> None:
        self.messages.clear()


def _safe_extra(context: Dict[str, Any]) -> Dict[str, Any]:
    """Rename keys that would clash with LogRecord attributes."""
    return {
        (f"ctx_{key}" if key in RESERVED_ATTRS else key): value
        for key, value in context.items()
    }


class GlobalPostLogger:
    """
    Stdlib-backed logger for GlobalPost client.

    Features:
    - Console and rotating file handlers
    - JSON, text, and colored formatters
    - channel=globalpost field on every record (configurable)
    - Context masking before anything reaches a handler

    Example:
        >>> config = LoggingConfig(level="DEBUG", format="json")
        >>> logger = GlobalPostLogger(config)
        >>> logger.warning("Retrying GlobalPost request after HTTP error.", status=503, attempt=1)
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "globalpost_client"):
        """
        Args:
            config: Logging configuration (uses defaults if None)
            name: Logger name
        """
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        self._logger = logging.getLogger(name)
        self._logger.setLevel(self.config.level.numeric)
        self._logger.propagate = False

        # Reinitialization replaces previous handlers
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)

        for handler in build_handlers(self.config):
            self._logger.addHandler(handler)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        self._logger.log(level, message, extra=_safe_extra(mask_context(context)))

    def debug(self, message: str, /, **context: Any) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, /, **context: Any) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, /, **context: Any) -> None:
        self._log(logging.ERROR, message, context)

    def critical(self, message: str, /, **context: Any) -> None:
        self._log(logging.CRITICAL, message, context)

    def close(self) -> None:
        """
        Flush and close all handlers.

        Idempotent - safe to call multiple times.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
