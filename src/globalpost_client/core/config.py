"""
Система конфигурации для GlobalPost клиента.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ENDPOINT MODE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class EndpointMode(str, Enum):
    """
    Режим API: sandbox или production.

    Каждый режим привязан к фиксированному base URL.

    Examples:
        >>> EndpointMode.parse("prod")
        <EndpointMode.PROD: 'PROD'>
        >>> EndpointMode.parse("garbage")
        <EndpointMode.TEST: 'TEST'>
    """
    TEST = "TEST"
    PROD = "PROD"

    @property
    def base_url(self) -> str:
        """Base URL для режима."""
        return BASE_URLS[self]

    @classmethod
    def parse(cls, value: Any) -> "EndpointMode":
        """
        Нормализовать режим.

        Регистр не важен. Неизвестное значение молча превращается в TEST.
        """
        if isinstance(value, EndpointMode):
            return value
        if not isinstance(value, str):
            return cls.TEST
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.TEST


BASE_URLS = {
    EndpointMode.TEST: "https://test-api.globalpost.com.ua",
    EndpointMode.PROD: "https://api.globalpost.com.ua",
}

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLIENT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ClientConfig:
    """
    Конфигурация GlobalPostClient.

    Args:
        timeout: Таймаут запроса (сек)
        connect_timeout: Таймаут подключения (сек)
        max_retries: Количество повторов (не включая первую попытку)
        retry_delay: Пауза между попытками (сек, допускается дробное)
        debug: Писать debug логи по каждой попытке
        verify_ssl: Проверять SSL сертификаты (выключать только для sandbox)

    Examples:
        >>> ClientConfig(max_retries=2, retry_delay=1.0)
        >>> ClientConfig.from_mapping({"timeout": 20, "debug": True})
    """
    timeout: float = 10.0
    connect_timeout: float = 5.0
    max_retries: int = 1
    retry_delay: float = 0.5
    debug: bool = False
    verify_ssl: bool = True

    def __post_init__(self):
        """Валидация."""
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be non-negative")

    @property
    def total_attempts(self) -> int:
        """Общее количество попыток (включая первую)."""
        return self.max_retries + 1

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> "ClientConfig":
        """
        Создать конфиг из словаря настроек.

        Распознаются ключи timeout, connect_timeout, max_retries, retry_delay,
        debug, verify_ssl. Остальные ключи игнорируются. Отрицательные
        max_retries и retry_delay обрезаются до 0.

        Args:
            mapping: Словарь настроек (None = дефолты)

        Returns:
            ClientConfig instance
        """
        if not mapping:
            return cls()

        kwargs = {}
        if mapping.get("timeout") is not None:
            kwargs["timeout"] = float(mapping["timeout"])
        if mapping.get("connect_timeout") is not None:
            kwargs["connect_timeout"] = float(mapping["connect_timeout"])
        if mapping.get("max_retries") is not None:
            kwargs["max_retries"] = max(0, int(mapping["max_retries"]))
        if mapping.get("retry_delay") is not None:
            kwargs["retry_delay"] = max(0.0, float(mapping["retry_delay"]))
        if "debug" in mapping:
            kwargs["debug"] = bool(mapping["debug"])
        if "verify_ssl" in mapping:
            kwargs["verify_ssl"] = bool(mapping["verify_ssl"])

        return cls(**kwargs)

    @classmethod
    def coerce(cls, config: Union["ClientConfig", Mapping[str, Any], None]) -> "ClientConfig":
        """Принять ClientConfig, словарь или None."""
        if isinstance(config, ClientConfig):
            return config
        return cls.from_mapping(config)
