"""
HTTP ответ, не зависящий от транспорта.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

HeaderValues = Union[str, Iterable[str]]


def _normalize_headers(headers: Optional[Mapping[str, HeaderValues]]) -> Mapping[str, Tuple[str, ...]]:
    """
    Привести заголовки к виду {lowercase name: (values...)}.

    Одинаковые имена в разном регистре склеиваются с сохранением порядка.
    """
    normalized = {}
    for name, values in (headers or {}).items():
        if isinstance(values, (str, bytes)):
            values = [values]
        key = str(name).strip().lower()
        normalized.setdefault(key, [])
        for value in values:
            if isinstance(value, bytes):
                value = value.decode("latin-1")
            normalized[key].append(str(value).strip())
    return MappingProxyType({key: tuple(values) for key, values in normalized.items()})


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP ответ.

    Args:
        status_code: HTTP статус
        headers: Заголовки (имя -> список значений), имена приводятся к нижнему регистру
        body: Сырое тело ответа (текст или бинарные данные, например PDF)

    Examples:
        >>> response = HttpResponse(200, {"Content-Type": "application/json"}, b"[]")
        >>> response.header_line("content-type")
        'application/json'
    """
    status_code: int
    headers: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    body: bytes = b""

    def __post_init__(self):
        """Нормализация заголовков и тела."""
        object.__setattr__(self, "status_code", int(self.status_code))
        object.__setattr__(self, "headers", _normalize_headers(self.headers))
        if self.body is None:
            object.__setattr__(self, "body", b"")
        elif isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    def get_header(self, name: str) -> Tuple[str, ...]:
        """Все значения заголовка (регистр имени не важен)."""
        return self.headers.get(name.lower(), ())

    def header_line(self, name: str) -> Optional[str]:
        """Значения заголовка через ', ' или None если заголовка нет."""
        values = self.get_header(name)
        if not values:
            return None
        return ", ".join(values)

    @property
    def content_type(self) -> Optional[str]:
        return self.header_line("Content-Type")

    @property
    def text(self) -> str:
        """Тело как текст (UTF-8, битые байты заменяются)."""
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return self.status_code < 400
