"""GlobalPost API client - parcel carrier API with retries and normalized errors."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.client import GlobalPostClient, ApiRequest
from .core.config import ClientConfig, EndpointMode
from .core.response import HttpResponse
from .core.transport import HttpTransport, RequestsTransport
from .core.exceptions import (
    GlobalPostException,
    TransportError,
    TransportErrorCode,
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
)
from .core.error_mapper import ClassifiedError, get_handled_codes
from .core.logging import (
    Logger,
    NullLogger,
    MemoryLogger,
    GlobalPostLogger,
    LoggingConfig,
)
from .core.env_config import load_from_env

# Users can configure logging themselves using logging.getLogger('globalpost_client')
logging.getLogger('globalpost_client').addHandler(logging.NullHandler())

try:
    __version__ = version("globalpost-client")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__license__ = "MIT"

__all__ = [
    # Core
    "GlobalPostClient",
    "ApiRequest",
    "ClientConfig",
    "EndpointMode",
    "HttpResponse",
    "HttpTransport",
    "RequestsTransport",
    "load_from_env",

    # Errors
    "ClassifiedError",
    "get_handled_codes",
    "GlobalPostException",
    "TransportError",
    "TransportErrorCode",
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

    # Logging
    "Logger",
    "NullLogger",
    "MemoryLogger",
    "GlobalPostLogger",
    "LoggingConfig",

    # Version
    "__version__",
]
