"""
Retry engine для повторных попыток.

Включает:
- Фиксированную паузу между попытками (0 = без sleep)
- Лимит попыток (max_retries + 1)
- Ретрай только 5xx статусов

Движок не хранит состояние между вызовами: номер попытки передаётся явно.
"""

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RetryEngine:
    """
    Решает, нужен ли повтор, и выдерживает паузу.

    Examples:
        >>> engine = RetryEngine(max_retries=2, retry_delay=0.5)
        >>> engine.max_attempts
        3
        >>> if engine.is_retryable_status(503) and engine.has_attempts_left(1):
        ...     engine.wait()
    """

    def __init__(
        self,
        max_retries: int = 1,
        retry_delay: float = 0.5,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Args:
            max_retries: Количество повторов (без первой попытки)
            retry_delay: Пауза между попытками (сек)
            sleep: Функция ожидания (по умолчанию time.sleep)
        """
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if retry_delay < 0:
            raise ValueError("retry_delay must be non-negative")

        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep or time.sleep

    @property
    def max_attempts(self) -> int:
        """Общее количество попыток (включая первую)."""
        return self.max_retries + 1

    def has_attempts_left(self, attempt: int) -> bool:
        """
        Args:
            attempt: Номер только что выполненной попытки (с 1)
        """
        return attempt < self.max_attempts

    @staticmethod
    def is_retryable_status(status_code: int) -> bool:
        return 500 <= status_code < 600

    def wait(self) -> None:
        """Пауза перед следующей попыткой."""
        if self.retry_delay > 0:
            logger.debug(f"Sleeping {self.retry_delay}s before retry")
            self._sleep(self.retry_delay)
