"""Core GlobalPost client модули."""

from .config import BASE_URLS, ClientConfig, EndpointMode
from .response import HttpResponse
from .transport import HttpTransport, RequestsTransport
from .retry_engine import RetryEngine
from .exceptions import (
    GlobalPostException,
    TransportError,
    TransportErrorCode,
    RETRYABLE_TRANSPORT_CODES,
    RequestFailedError,
    GlobalPostAPIError,
    APITransportError,
    BadRequestError,
    AuthenticationError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    ValidationFailedError,
    RateLimitedError,
    ServiceUnavailableError,
    classify_requests_exception,
)
from .error_mapper import (
    ClassifiedError,
    ERROR_CODE_MAP,
    STATUS_MAP,
    classify_request_failure,
    classify_transport_error,
    get_handled_codes,
)
from .client import ApiRequest, GlobalPostClient

__all__ = [
    # Config
    "BASE_URLS",
    "ClientConfig",
    "EndpointMode",
    # Transport
    "HttpResponse",
    "HttpTransport",
    "RequestsTransport",
    # Retry
    "RetryEngine",
    # Client
    "ApiRequest",
    "GlobalPostClient",
    # Error mapping
    "ClassifiedError",
    "ERROR_CODE_MAP",
    "STATUS_MAP",
    "classify_request_failure",
    "classify_transport_error",
    "get_handled_codes",
    # Exceptions
    "GlobalPostException",
    "TransportError",
    "TransportErrorCode",
    "RETRYABLE_TRANSPORT_CODES",
    "RequestFailedError",
    "GlobalPostAPIError",
    "APITransportError",
    "BadRequestError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ValidationFailedError",
    "RateLimitedError",
    "ServiceUnavailableError",
    "classify_requests_exception",
]
