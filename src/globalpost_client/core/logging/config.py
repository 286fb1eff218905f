"""
Конфигурация GlobalPostLogger.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LogLevel(str, Enum):
    """Уровни логирования."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        return logging.getLevelName(self.value)


class LogFormat(str, Enum):
    """Формат вывода."""
    JSON = "json"
    TEXT = "text"
    COLORED = "colored"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Настройки логгера.

    Строковые level/format принимаются в любом регистре и приводятся к enum.

    Args:
        level: Минимальный уровень
        format: json, text или colored
        console: Писать в stdout
        file_path: Файл с ротацией (None = без файла)
        max_bytes: Размер файла до ротации
        backup_count: Сколько старых файлов хранить
        channel: Значение поля channel в каждой записи (None = не добавлять)

    Examples:
        >>> LoggingConfig(level="debug", format="json", console=False, file_path="/var/log/globalpost.log")
    """
    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.TEXT
    console: bool = True
    file_path: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    channel: Optional[str] = "globalpost"

    def __post_init__(self):
        if not isinstance(self.level, LogLevel):
            object.__setattr__(self, "level", LogLevel(str(self.level).upper()))
        if not isinstance(self.format, LogFormat):
            object.__setattr__(self, "format", LogFormat(str(self.format).lower()))

        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if self.backup_count < 0:
            raise ValueError("backup_count must be non-negative")

    @property
    def file_enabled(self) -> bool:
        return bool(self.file_path)
