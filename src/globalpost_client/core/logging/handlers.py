"""
Handlers для GlobalPostLogger: stdout и файл с ротацией.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from .config import LoggingConfig
from .formatters import get_formatter


class ChannelFilter(logging.Filter):
    """Проставляет поле channel, если запись его ещё не несёт."""

    def __init__(self, channel: str):
        super().__init__()
        self.channel = channel

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "channel"):
            record.channel = self.channel
        return True


def build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    """
    Handlers по конфигурации.

    Каталог для файла создаётся при необходимости. Все handlers получают
    один formatter, уровень из конфига и ChannelFilter.
    """
    handlers: List[logging.Handler] = []

    if config.console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if config.file_enabled:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            filename=config.file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        ))

    formatter = get_formatter(config.format)
    for handler in handlers:
        handler.setLevel(config.level.numeric)
        handler.setFormatter(formatter)
        if config.channel:
            handler.addFilter(ChannelFilter(config.channel))

    return handlers
