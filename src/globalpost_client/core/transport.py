# src/globalpost_client/core/transport.py
"""
Транспорт: один сырой HTTP запрос.

HttpTransport - граница сетевого I/O, подменяемая в тестах.
RequestsTransport - реализация поверх requests.
"""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional, Union

import requests
from requests.adapters import HTTPAdapter

from .exceptions import TransportError, classify_requests_exception
from .response import HttpResponse
from .session_manager import ThreadSafeSessionManager


class HttpTransport(ABC):
    """
    Контракт транспорта.

    request() возвращает HttpResponse для любого HTTP статуса, включая
    4xx/5xx. TransportError выбрасывается только при сетевых сбоях.
    """

    @abstractmethod
    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[Union[str, bytes]] = None,
    ) -> HttpResponse:
        """
        Выполнить один HTTP запрос.

        Args:
            method: HTTP метод
            url: Полный URL
            headers: Заголовки (регистр имён сохраняется)
            body: Тело запроса

        Raises:
            TransportError: соединение, таймаут, DNS
        """

    def close(self) -> None:
        """Освободить ресурсы."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class RequestsTransport(HttpTransport):
    """
    Транспорт на requests.

    Features:
        - Connection pooling, отдельная сессия на поток
        - (connect, read) таймауты передаются в requests
        - Редиректы не выполняются
        - verify_ssl=False только для sandbox/тестов

    Examples:
        >>> transport = RequestsTransport(timeout=10, connect_timeout=5)
        >>> response = transport.request("GET", "https://test-api.globalpost.com.ua/public/tariff-international/countries")
    """

    def __init__(
        self,
        timeout: float = 10.0,
        connect_timeout: float = 5.0,
        verify_ssl: bool = True,
        pool_maxsize: int = 10,
    ):
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        if connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")

        self.timeout = float(timeout)
        self.connect_timeout = float(connect_timeout)
        self.verify_ssl = verify_ssl
        self.pool_maxsize = pool_maxsize
        self._session_manager = ThreadSafeSessionManager(session_factory=self._create_session)

    def _create_session(self) -> requests.Session:
        """Create configured session."""
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=1,
            pool_maxsize=self.pool_maxsize,
            max_retries=0  # Ретраи через RetryEngine клиента
        )
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        return session

    @property
    def session(self) -> requests.Session:
        return self._session_manager.get_session()

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[Union[str, bytes]] = None,
    ) -> HttpResponse:
        if isinstance(body, str):
            body = body.encode('utf-8')

        try:
            response = self.session.request(
                method=method.upper(),
                url=url,
                headers=dict(headers or {}),
                data=body,
                timeout=(self.connect_timeout, self.timeout),
                verify=self.verify_ssl,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e) from e

        try:
            content = response.content
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e) from e

        return HttpResponse(
            status_code=response.status_code,
            headers=_collect_headers(response),
            body=content,
        )

    def close(self) -> None:
        self._session_manager.close_all()


def _collect_headers(response: requests.Response) -> Dict[str, list]:
    """
    Заголовки ответа с сохранением повторяющихся значений.

    requests склеивает повторы через запятую, поэтому читаем raw
    HTTPHeaderDict от urllib3, если он есть.
    """
    raw_headers = getattr(response.raw, 'headers', None)
    if raw_headers is not None and hasattr(raw_headers, 'getlist'):
        return {name: raw_headers.getlist(name) for name in raw_headers}

    return {name: [value] for name, value in response.headers.items()}
