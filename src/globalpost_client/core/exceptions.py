"""
Иерархия исключений GlobalPost клиента.

Классификация:
- TransportError - сбой сети (DNS, таймаут, соединение), несёт числовой код
- RequestFailedError - API вернул ошибочный ответ (сырой, до классификации)
- GlobalPostAPIError - нормализованная ошибка, которую видит вызывающий код
"""

import socket
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple
import json

import requests
from urllib3.exceptions import NameResolutionError

if TYPE_CHECKING:
    from .error_mapper import ClassifiedError
    from .response import HttpResponse

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class GlobalPostException(Exception):
    """Базовое исключение GlobalPost клиента."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRANSPORT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportErrorCode(IntEnum):
    """Низкоуровневые причины сбоя транспорта."""
    UNKNOWN = 0
    MALFORMED_URL = 1
    DNS_FAILED = 2
    PROXY_FAILED = 3
    CONNECT_FAILED = 4
    TIMEOUT = 5
    SSL_ERROR = 6
    TOO_MANY_REDIRECTS = 7
    RECEIVE_ERROR = 8


# Закрытый набор причин, после которых запрос можно повторить
RETRYABLE_TRANSPORT_CODES = frozenset({
    TransportErrorCode.TIMEOUT,
    TransportErrorCode.CONNECT_FAILED,
    TransportErrorCode.DNS_FAILED,
    TransportErrorCode.PROXY_FAILED,
})


class TransportError(GlobalPostException):
    """
    Сбой на уровне сети.

    Никогда не выбрасывается на HTTP статусы 4xx/5xx - только когда
    соединение не установлено, истёк таймаут или имя не разрешилось.

    Args:
        message: Сообщение об ошибке
        code: TransportErrorCode
    """

    def __init__(self, message: str, code: int = TransportErrorCode.UNKNOWN):
        try:
            self.code = TransportErrorCode(code)
        except ValueError:
            self.code = TransportErrorCode.UNKNOWN
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        return self.code in RETRYABLE_TRANSPORT_CODES

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# FAILED REQUEST (до классификации)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestFailedError(GlobalPostException):
    """
    API ответил ошибкой или ответ не удалось разобрать.

    Сырой материал для классификатора: статус, upstream код, тело, заголовки.

    Args:
        message: Сообщение (из тела ответа или дефолтное)
        status_code: HTTP статус
        api_code: Код ошибки из тела ответа ("code")
        response_body: Сырое тело ответа
        response_headers: Заголовки ответа
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        api_code: Optional[str] = None,
        response_body: Optional[bytes] = None,
        response_headers: Optional[Mapping[str, Tuple[str, ...]]] = None,
    ):
        self.status_code = status_code
        self.api_code = api_code
        self.response_body = response_body
        self.response_headers = response_headers
        super().__init__(message)

    @classmethod
    def from_response(cls, response: "HttpResponse") -> "RequestFailedError":
        """
        Построить ошибку из неуспешного ответа.

        JSON тело разбирается если Content-Type JSON или не указан:
        "message" (иначе "error") становится сообщением, скалярный "code" -
        upstream кодом.
        """
        message = f"GlobalPost API request failed with status {response.status_code}."
        api_code = None

        content_type = response.content_type
        if content_type is None or "json" in content_type.lower():
            decoded = _decode_json_body(response.body)
            if isinstance(decoded, dict):
                if isinstance(decoded.get("message"), str):
                    message = decoded["message"]
                elif isinstance(decoded.get("error"), str):
                    message = decoded["error"]

                code = decoded.get("code")
                if isinstance(code, bool):
                    api_code = "1" if code else "0"
                elif isinstance(code, (str, int, float)):
                    api_code = str(code)

        return cls(
            message,
            status_code=response.status_code,
            api_code=api_code,
            response_body=response.body,
            response_headers=response.headers,
        )


def _decode_json_body(body: bytes) -> Any:
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CLASSIFIED (то, что получает вызывающий код)
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class GlobalPostAPIError(GlobalPostException):
    """
    Нормализованная ошибка API.

    Args:
        classified: ClassifiedError из error_mapper
        response_body: Сырое тело ответа (для диагностики)
        response_headers: Заголовки ответа (для диагностики)

    Attributes:
        code: Стабильный машинный код (api_bad_request, api_transport, ...)
        admin_message: Безопасное сообщение для администратора
        log_message: Подробное сообщение для логов
        http_status: HTTP статус (если был ответ)
        api_code: Upstream код ошибки (если был)
    """

    def __init__(
        self,
        classified: "ClassifiedError",
        response_body: Optional[bytes] = None,
        response_headers: Optional[Mapping[str, Tuple[str, ...]]] = None,
    ):
        self.classified = classified
        self.code = classified.code
        self.admin_message = classified.admin_message
        self.log_message = classified.log_message
        self.http_status = classified.http_status
        self.api_code = classified.api_code
        self.response_body = response_body
        self.response_headers = response_headers
        super().__init__(classified.log_message)

    @classmethod
    def from_classified(
        cls,
        classified: "ClassifiedError",
        response_body: Optional[bytes] = None,
        response_headers: Optional[Mapping[str, Tuple[str, ...]]] = None,
    ) -> "GlobalPostAPIError":
        """Создать исключение подходящего подкласса по коду."""
        error_class = ERROR_CLASSES.get(classified.code, GlobalPostAPIError)
        return error_class(classified, response_body=response_body, response_headers=response_headers)

    def to_dict(self) -> Dict[str, Any]:
        return self.classified.to_dict()


class APITransportError(GlobalPostAPIError):
    """api_transport - сеть, DNS, таймаут."""


class BadRequestError(GlobalPostAPIError):
    """api_bad_request - 400."""


class AuthenticationError(GlobalPostAPIError):
    """api_auth_failed - 401 или INVALID_TOKEN/AUTH_ERROR."""


class ForbiddenError(GlobalPostAPIError):
    """api_forbidden - 403 или PERMISSION_DENIED."""


class NotFoundError(GlobalPostAPIError):
    """api_not_found - 404 или NOT_FOUND."""


class ConflictError(GlobalPostAPIError):
    """api_conflict - 409."""


class ValidationFailedError(GlobalPostAPIError):
    """api_validation_failed - 422 или VALIDATION_ERROR."""


class RateLimitedError(GlobalPostAPIError):
    """api_rate_limited - 429 или RATE_LIMITED."""


class ServiceUnavailableError(GlobalPostAPIError):
    """api_service_unavailable - 5xx или SERVER_ERROR."""


ERROR_CLASSES = {
    "api_transport": APITransportError,
    "api_bad_request": BadRequestError,
    "api_auth_failed": AuthenticationError,
    "api_forbidden": ForbiddenError,
    "api_not_found": NotFoundError,
    "api_conflict": ConflictError,
    "api_validation_failed": ValidationFailedError,
    "api_rate_limited": RateLimitedError,
    "api_service_unavailable": ServiceUnavailableError,
}

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _is_dns_failure(exc: BaseException) -> bool:
    """Найти NameResolutionError/gaierror в цепочке причин requests/urllib3."""
    seen = set()
    stack = [exc]
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))

        if isinstance(current, (NameResolutionError, socket.gaierror)):
            return True

        stack.append(getattr(current, "reason", None))
        stack.append(current.__cause__)
        stack.append(current.__context__)
        stack.extend(arg for arg in current.args if isinstance(arg, BaseException))
    return False


def classify_requests_exception(exc: Exception) -> TransportError:
    """
    Конвертировать requests.exceptions в TransportError с кодом.

    Args:
        exc: Исключение из requests

    Returns:
        TransportError с правильным TransportErrorCode

    Examples:
        >>> err = classify_requests_exception(requests.exceptions.ConnectTimeout("slow"))
        >>> err.code == TransportErrorCode.TIMEOUT
        True
    """
    message = str(exc).strip() or type(exc).__name__

    if isinstance(exc, requests.exceptions.Timeout):
        code = TransportErrorCode.TIMEOUT
    elif isinstance(exc, requests.exceptions.ProxyError):
        code = TransportErrorCode.PROXY_FAILED
    elif isinstance(exc, requests.exceptions.SSLError):
        code = TransportErrorCode.SSL_ERROR
    elif isinstance(exc, requests.exceptions.ConnectionError):
        code = TransportErrorCode.DNS_FAILED if _is_dns_failure(exc) else TransportErrorCode.CONNECT_FAILED
    elif isinstance(exc, (
        requests.exceptions.InvalidURL,
        requests.exceptions.MissingSchema,
        requests.exceptions.InvalidSchema,
    )):
        code = TransportErrorCode.MALFORMED_URL
    elif isinstance(exc, requests.exceptions.TooManyRedirects):
        code = TransportErrorCode.TOO_MANY_REDIRECTS
    elif isinstance(exc, (
        requests.exceptions.ChunkedEncodingError,
        requests.exceptions.ContentDecodingError,
    )):
        code = TransportErrorCode.RECEIVE_ERROR
    else:
        code = TransportErrorCode.UNKNOWN

    return TransportError(message, code)
