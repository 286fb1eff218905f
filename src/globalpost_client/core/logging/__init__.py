"""
Logging system for GlobalPost client.

Example:
    >>> from globalpost_client.core.logging import GlobalPostLogger, LoggingConfig
    >>>
    >>> logger = GlobalPostLogger(LoggingConfig(level="DEBUG", format="colored"))
    >>> client = GlobalPostClient(token, "TEST", {"debug": True}, logger=logger)
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import Logger, NullLogger, MemoryLogger, GlobalPostLogger
from .formatters import JSONFormatter, TextFormatter, ColoredFormatter, get_formatter
from .handlers import ChannelFilter, build_handlers

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Loggers
    "Logger",
    "NullLogger",
    "MemoryLogger",
    "GlobalPostLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "ColoredFormatter",
    "get_formatter",
    # Handlers
    "ChannelFilter",
    "build_handlers",
]
