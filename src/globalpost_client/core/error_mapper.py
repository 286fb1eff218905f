"""
Классификатор ошибок GlobalPost API.

Чистые функции без побочных эффектов: превращают RequestFailedError или
TransportError в ClassifiedError со стабильным кодом, сообщением для
администратора и подробным сообщением для логов.

Приоритет: upstream api-код -> HTTP статус -> статус >= 500 -> api_error.
"""

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Optional

from .exceptions import RequestFailedError

AUTH_FAILED = MappingProxyType({
    "code": "api_auth_failed",
    "message": "GlobalPost authentication failed. Check the API token.",
})
FORBIDDEN = MappingProxyType({
    "code": "api_forbidden",
    "message": "GlobalPost denied access to the requested resource.",
})
NOT_FOUND = MappingProxyType({
    "code": "api_not_found",
    "message": "GlobalPost could not find the requested resource.",
})
VALIDATION_FAILED = MappingProxyType({
    "code": "api_validation_failed",
    "message": "GlobalPost validation failed for the shipment payload.",
})
RATE_LIMITED = MappingProxyType({
    "code": "api_rate_limited",
    "message": "Too many requests were sent to GlobalPost. Try again later.",
})
SERVICE_UNAVAILABLE = MappingProxyType({
    "code": "api_service_unavailable",
    "message": "GlobalPost service is temporarily unavailable. Try again later.",
})
GENERIC_ERROR = MappingProxyType({
    "code": "api_error",
    "message": "GlobalPost returned an unexpected error. Try again later or contact support.",
})

STATUS_MAP = MappingProxyType({
    400: MappingProxyType({
        "code": "api_bad_request",
        "message": "GlobalPost rejected the request as invalid.",
    }),
    401: AUTH_FAILED,
    403: FORBIDDEN,
    404: NOT_FOUND,
    409: MappingProxyType({
        "code": "api_conflict",
        "message": "A conflicting shipment already exists in GlobalPost.",
    }),
    422: VALIDATION_FAILED,
    429: RATE_LIMITED,
})

# Ключи в верхнем регистре, поиск регистронезависимый
ERROR_CODE_MAP = MappingProxyType({
    "INVALID_TOKEN": AUTH_FAILED,
    "AUTH_ERROR": AUTH_FAILED,
    "PERMISSION_DENIED": FORBIDDEN,
    "NOT_FOUND": NOT_FOUND,
    "VALIDATION_ERROR": VALIDATION_FAILED,
    "RATE_LIMITED": RATE_LIMITED,
    "SERVER_ERROR": SERVICE_UNAVAILABLE,
})

TRANSPORT_CODE = "api_transport"
TRANSPORT_ADMIN_MESSAGE = "Connection to GlobalPost failed. Check the network connection and retry."
TRANSPORT_FALLBACK_LOG = "Network request to GlobalPost failed."


@dataclass(frozen=True)
class ClassifiedError:
    """
    Нормализованная ошибка.

    Args:
        code: Стабильный машинный код, всегда непустой
        admin_message: Безопасное сообщение для UI
        log_message: Подробное диагностическое сообщение
        http_status: HTTP статус (None для сетевых ошибок)
        api_code: Upstream код ошибки в исходном написании
    """
    code: str
    admin_message: str
    log_message: str
    http_status: Optional[int] = None
    api_code: Optional[str] = None

    def __post_init__(self):
        if not self.code:
            raise ValueError("code must be non-empty")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _select_mapping(status: Optional[int], api_code: Optional[str]):
    if api_code is not None and api_code.upper() in ERROR_CODE_MAP:
        return ERROR_CODE_MAP[api_code.upper()]
    if status is not None and status in STATUS_MAP:
        return STATUS_MAP[status]
    if status is not None and status >= 500:
        return SERVICE_UNAVAILABLE
    return GENERIC_ERROR


def classify_request_failure(failure: RequestFailedError) -> ClassifiedError:
    """
    Классифицировать неуспешный HTTP запрос.

    Args:
        failure: RequestFailedError со статусом, api-кодом, телом и заголовками

    Returns:
        ClassifiedError

    Examples:
        >>> failure = RequestFailedError("Invalid data", status_code=400, api_code="invalid_data")
        >>> classify_request_failure(failure).log_message
        'HTTP 400: Invalid data [code: invalid_data]'
    """
    status = failure.status_code
    api_code = failure.api_code
    mapped = _select_mapping(status, api_code)

    message = (failure.message or "").strip()
    log_message = message or mapped["message"]

    if status is not None:
        log_message = f"HTTP {status}: {log_message}"

    if api_code is not None:
        log_message += f" [code: {api_code}]"

    return ClassifiedError(
        code=mapped["code"],
        admin_message=mapped["message"],
        log_message=log_message,
        http_status=status,
        api_code=api_code,
    )


def classify_transport_error(exc: BaseException) -> ClassifiedError:
    """
    Классифицировать сетевую ошибку.

    Всегда api_transport; log_message - текст исключения или фиксированная
    строка, если текст пустой.
    """
    message = str(exc).strip() or TRANSPORT_FALLBACK_LOG

    return ClassifiedError(
        code=TRANSPORT_CODE,
        admin_message=TRANSPORT_ADMIN_MESSAGE,
        log_message=message,
    )


def get_handled_codes() -> Dict[str, List]:
    """Список обрабатываемых HTTP статусов и upstream кодов (для документации)."""
    statuses = list(STATUS_MAP.keys())
    for status in (500, 503):
        if status not in statuses:
            statuses.append(status)

    return {
        "status": statuses,
        "api": list(ERROR_CODE_MAP.keys()),
    }
