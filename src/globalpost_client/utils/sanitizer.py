# src/globalpost_client/utils/sanitizer.py
"""
Утилита для маскирования чувствительных данных в логах.

Используется клиентом перед каждой записью в лог, чтобы токены и
длинные payload'ы (PII) не попадали в логи.
"""

from typing import Any, Dict, Mapping

FILTERED = "[filtered]"

# Значения длиннее лимита обрезаются до MAX_VALUE_LENGTH - 3 символов + "..."
MAX_VALUE_LENGTH = 160
ELLIPSIS = "..."


def is_sensitive_key(key: Any) -> bool:
    """
    Проверяет, является ли ключ чувствительным.

    Чувствительны ключи, содержащие "token", и ключ "authorization"
    (регистр не важен).

    Examples:
        >>> is_sensitive_key("api_token")
        True
        >>> is_sensitive_key("Authorization")
        True
        >>> is_sensitive_key("note")
        False
    """
    normalized = str(key).lower()
    return normalized == "authorization" or "token" in normalized


def truncate_value(value: str) -> str:
    """Обрезать строку длиннее MAX_VALUE_LENGTH с маркером '...'."""
    trimmed = value.strip()
    if len(trimmed) > MAX_VALUE_LENGTH:
        return trimmed[:MAX_VALUE_LENGTH - len(ELLIPSIS)] + ELLIPSIS
    return trimmed


def _mask_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        return truncate_value(value)

    if isinstance(value, Mapping):
        return mask_context(value)

    if isinstance(value, (list, tuple)):
        return [_mask_value(item) for item in value]

    # Объекты не сериализуем
    return FILTERED


def mask_token(token: str, visible: int = 4) -> str:
    """
    Токен для сводок конфигурации: видны только последние символы.

    Короткий токен скрывается полностью.

    Examples:
        >>> mask_token("test-token-123456")
        '****3456'
        >>> mask_token("abc")
        '****'
    """
    if not token:
        return ""
    if len(token) <= visible * 2:
        return "****"
    return f"****{token[-visible:]}"


def mask_context(context: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Маскирует контекст лог-записи.

    Args:
        context: Словарь полей для лога

    Returns:
        Новый словарь: чувствительные ключи -> "[filtered]", длинные строки
        обрезаны, словари внутри списков маскируются рекурсивно,
        объекты -> "[filtered]"

    Examples:
        >>> mask_context({"token": "secret123", "note": "ok"})
        {'token': '[filtered]', 'note': 'ok'}
    """
    masked = {}
    for key, value in context.items():
        if is_sensitive_key(key):
            masked[key] = FILTERED
        else:
            masked[key] = _mask_value(value)
    return masked
