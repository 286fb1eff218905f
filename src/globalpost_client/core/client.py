# src/globalpost_client/core/client.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union
import json

from .config import ClientConfig, EndpointMode
from .error_mapper import classify_request_failure, classify_transport_error
from .exceptions import GlobalPostAPIError, RequestFailedError, TransportError
from .logging.logger import Logger, NullLogger
from .response import HttpResponse
from .retry_engine import RetryEngine
from .transport import HttpTransport, RequestsTransport
from .utils import append_query, build_query, encode_path_segment, has_header, join_url, merge_headers
from ..utils.sanitizer import mask_context

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
PDF_CONTENT_TYPE = "application/pdf"

DECODE_FAILED_MESSAGE = "Failed to decode GlobalPost API response."


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    if mapping is None:
        return None
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ApiRequest:
    """
    Описание одного вызова API.

    Args:
        method: HTTP метод
        path: Путь относительно base URL
        query: Query параметры (скаляры и массивы скаляров)
        form: Данные формы (x-www-form-urlencoded)
        body: Сырое тело (используется если form не задан)
        headers: Заголовки поверх Authorization/Accept
    """
    method: str
    path: str
    query: Optional[Mapping[str, Any]] = None
    form: Optional[Mapping[str, Any]] = None
    body: Optional[Union[str, bytes]] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        object.__setattr__(self, 'method', self.method.upper())
        object.__setattr__(self, 'query', _freeze(self.query))
        object.__setattr__(self, 'form', _freeze(self.form))
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers or {})))


class GlobalPostClient:
    """
    Клиент GlobalPost API.

    Features:
        - Bearer авторизация статическим токеном
        - TEST/PROD режимы (неизвестный режим = TEST)
        - Повтор сетевых сбоев и 5xx с фиксированной паузой
        - Все ошибки приходят как GlobalPostAPIError с нормализованным кодом
        - Immutable после создания, без состояния между вызовами

    Examples:
        >>> client = GlobalPostClient("token", "TEST", {"max_retries": 2, "retry_delay": 1.0})
        >>> countries = client.get_countries()
        >>> pdf = client.print_label("en", "ORDER-42")
    """

    def __init__(
        self,
        token: str,
        mode: Union[str, EndpointMode] = EndpointMode.TEST,
        config: Union[ClientConfig, Mapping[str, Any], None] = None,
        transport: Optional[HttpTransport] = None,
        logger: Optional[Logger] = None,
    ):
        """
        Args:
            token: API токен (пробелы по краям обрезаются)
            mode: "TEST" или "PROD", регистр не важен
            config: ClientConfig или словарь с ключами timeout, connect_timeout,
                max_retries, retry_delay, debug, verify_ssl
            transport: HttpTransport (по умолчанию RequestsTransport)
            logger: Logger (по умолчанию NullLogger)
        """
        config = ClientConfig.coerce(config)
        endpoint_mode = EndpointMode.parse(mode)
        owns_transport = transport is None

        if transport is None:
            transport = RequestsTransport(
                timeout=config.timeout,
                connect_timeout=config.connect_timeout,
                verify_ssl=config.verify_ssl,
            )

        # Immutable fields
        object.__setattr__(self, '_token', (token or "").strip())
        object.__setattr__(self, '_mode', endpoint_mode)
        object.__setattr__(self, '_base_url', endpoint_mode.base_url)
        object.__setattr__(self, '_config', config)
        object.__setattr__(self, '_transport', transport)
        object.__setattr__(self, '_owns_transport', owns_transport)
        object.__setattr__(self, '_logger', logger if logger is not None else NullLogger())
        object.__setattr__(self, '_retry_engine', RetryEngine(config.max_retries, config.retry_delay))
        object.__setattr__(self, '_initialized', True)

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - GlobalPostClient is immutable. "
                f"Create new instance instead."
            )
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"GlobalPostClient(mode={self._mode.value!r}, base_url={self._base_url!r})"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Закрыть транспорт, если клиент создал его сам."""
        if self._owns_transport:
            self._transport.close()

    @property
    def mode(self) -> EndpointMode:
        return self._mode

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def config(self) -> ClientConfig:
        return self._config

    # ==================== Операции API ====================

    def get_countries(self) -> Union[List[Any], Dict[str, Any]]:
        """Список стран назначения для международных тарифов."""
        response = self._perform_request(ApiRequest('GET', '/public/tariff-international/countries'))
        return self._decode_json(response)

    def get_options(self, params: Mapping[str, Any]) -> Union[List[Any], Dict[str, Any]]:
        """
        Варианты тарифов для отправления.

        Args:
            params: Query параметры (from_country, to_country, weight, ...)
        """
        response = self._perform_request(ApiRequest(
            'GET',
            '/public/tariff-international/get-options',
            query=params,
        ))
        return self._decode_json(response)

    def create_short_order(self, form_data: Mapping[str, Any]) -> Union[List[Any], Dict[str, Any]]:
        """
        Создать заказ (короткая форма).

        Args:
            form_data: Поля заказа, отправляются как x-www-form-urlencoded
        """
        response = self._perform_request(ApiRequest(
            'POST',
            '/api/create-short-order',
            form=form_data,
            headers={'Content-Type': FORM_CONTENT_TYPE},
        ))
        return self._decode_json(response)

    def print_label(self, locale: str, order_id: str) -> bytes:
        """
        Этикетка заказа в PDF.

        Возвращает тело ответа без изменений; проверка на пустоту - на
        вызывающей стороне.
        """
        path = f"/api/orders/print-new/{encode_path_segment(locale)}/{encode_path_segment(order_id)}"
        response = self._perform_request(ApiRequest('GET', path, headers={'Accept': PDF_CONTENT_TYPE}))
        return response.body

    def print_invoice(self, order_id: str) -> bytes:
        """Инвойс заказа в PDF (тело ответа без изменений)."""
        path = f"/api/orders/print-invoice/{encode_path_segment(order_id)}"
        response = self._perform_request(ApiRequest('GET', path, headers={'Accept': PDF_CONTENT_TYPE}))
        return response.body

    # ==================== Сборка запроса ====================

    def _build_url(self, request: ApiRequest) -> str:
        url = join_url(self._base_url, request.path)
        if request.query is not None:
            url = append_query(url, build_query(request.query))
        return url

    def _build_headers(self, request: ApiRequest) -> Dict[str, str]:
        headers = {
            'Authorization': f"Bearer {self._token}",
            'Accept': JSON_CONTENT_TYPE,
        }
        return merge_headers(headers, request.headers)

    @staticmethod
    def _build_body(request: ApiRequest) -> Optional[Union[str, bytes]]:
        if request.form is not None:
            return build_query(request.form)
        return request.body

    # ==================== Retry loop ====================

    def _perform_request(self, request: ApiRequest) -> HttpResponse:
        """
        Выполнить запрос с повторами.

        Повторяются только сетевые сбои из RETRYABLE_TRANSPORT_CODES и 5xx.
        4xx и прочие сетевые сбои выбрасываются сразу. Ответ < 400
        возвращается сразу.

        Raises:
            GlobalPostAPIError: любая ошибка после классификации
        """
        url = self._build_url(request)
        headers = self._build_headers(request)
        body = self._build_body(request)

        if body is not None and not has_header(headers, 'Content-Type'):
            headers['Content-Type'] = JSON_CONTENT_TYPE

        engine = self._retry_engine
        last_failure: Union[TransportError, HttpResponse, None] = None

        for attempt in range(1, engine.max_attempts + 1):
            self._log_debug('GlobalPost request', {
                'method': request.method,
                'url': url,
                'attempt': attempt,
                'query_keys': list(request.query.keys()) if request.query is not None else [],
                'has_body': body is not None,
            })

            try:
                response = self._transport.request(request.method, url, headers, body)
            except TransportError as e:
                if not e.retryable:
                    raise self._transport_failure(e) from e

                last_failure = e
                if engine.has_attempts_left(attempt):
                    self._log_warning('Retrying GlobalPost request after transport error.', {
                        'attempt': attempt,
                        'error_code': int(e.code),
                    })
                    engine.wait()
                continue

            self._log_debug('GlobalPost response', {
                'status': response.status_code,
                'attempt': attempt,
            })

            if not engine.is_retryable_status(response.status_code):
                if response.status_code >= 400:
                    raise self._response_failure(response)
                return response

            last_failure = response
            if engine.has_attempts_left(attempt):
                self._log_warning('Retrying GlobalPost request after HTTP error.', {
                    'status': response.status_code,
                    'attempt': attempt,
                })
                engine.wait()

        if isinstance(last_failure, TransportError):
            raise self._transport_failure(last_failure) from last_failure
        raise self._response_failure(last_failure)

    # ==================== Ошибки и декодирование ====================

    @staticmethod
    def _transport_failure(error: TransportError) -> GlobalPostAPIError:
        return GlobalPostAPIError.from_classified(classify_transport_error(error))

    @staticmethod
    def _request_failure(failure: RequestFailedError) -> GlobalPostAPIError:
        classified = classify_request_failure(failure)
        return GlobalPostAPIError.from_classified(
            classified,
            response_body=failure.response_body,
            response_headers=failure.response_headers,
        )

    def _response_failure(self, response: HttpResponse) -> GlobalPostAPIError:
        return self._request_failure(RequestFailedError.from_response(response))

    def _decode_json(self, response: HttpResponse) -> Union[List[Any], Dict[str, Any]]:
        """JSON тело, которое обязано быть массивом или объектом."""
        try:
            decoded = json.loads(response.body)
        except ValueError:
            decoded = None

        if not isinstance(decoded, (list, dict)):
            raise self._request_failure(RequestFailedError(
                DECODE_FAILED_MESSAGE,
                status_code=response.status_code,
                response_body=response.body,
                response_headers=response.headers,
            ))

        return decoded

    # ==================== Логирование ====================

    def _log_debug(self, message: str, context: Mapping[str, Any]) -> None:
        if self._config.debug:
            self._logger.debug(message, **mask_context(context))

    def _log_warning(self, message: str, context: Mapping[str, Any]) -> None:
        self._logger.warning(message, **mask_context(context))
