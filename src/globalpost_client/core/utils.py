"""
Utility functions for building GlobalPost requests.

Includes:
- RFC 3986 query / form encoding
- URL joining
- Case-insensitive header merging
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

# RFC 3986 unreserved characters stay as is, everything else is percent-encoded
_UNRESERVED = '-_.~'

_SCALARS = (str, int, float, bool)


def _encode(value: str) -> str:
    return quote(value, safe=_UNRESERVED)


def _scalar_to_str(value: Any) -> str:
    if isinstance(value, bool):
        return '1' if value else '0'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return

    if isinstance(value, _SCALARS):
        pairs.append((prefix, _scalar_to_str(value)))
    elif isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    # Other types are silently dropped


def build_query(params: Optional[Mapping[str, Any]]) -> str:
    """
    Encode a mapping as an RFC 3986 query string.

    Arrays use indexed bracket keys (``b[0]=1&b[1]=2``), nested mappings use
    named bracket keys. ``None`` and values that are neither scalars nor
    arrays are dropped.

    Args:
        params: Mapping of scalars / arrays of scalars

    Returns:
        Encoded query string (empty string for empty input)

    Examples:
        >>> build_query({'a': 'x', 'b': [1, 2]})
        'a=x&b%5B0%5D=1&b%5B1%5D=2'
        >>> build_query({'recipient_phone': '+380001112233'})
        'recipient_phone=%2B380001112233'
    """
    if not params:
        return ''

    pairs: List[Tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)

    return '&'.join(f"{_encode(key)}={_encode(value)}" for key, value in pairs)


def encode_path_segment(value: Any) -> str:
    """Percent-encode a single path segment (slashes included)."""
    return quote(str(value), safe=_UNRESERVED)


def join_url(base_url: str, path: str) -> str:
    """Join base URL and path with exactly one slash."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def append_query(url: str, query: str) -> str:
    """Append an encoded query string to URL."""
    if not query:
        return url
    separator = '&' if '?' in url else '?'
    return f"{url}{separator}{query}"


def merge_headers(base: Mapping[str, str], overrides: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """
    Merge headers case-insensitively.

    An override replaces any base header with the same name regardless of
    casing; the override's spelling is the one sent on the wire.

    Example:
        >>> merge_headers({'Accept': 'application/json'}, {'accept': 'application/pdf'})
        {'accept': 'application/pdf'}
    """
    result = dict(base)
    for name, value in (overrides or {}).items():
        for existing in [key for key in result if key.lower() == name.lower()]:
            del result[existing]
        result[name] = value
    return result


def has_header(headers: Mapping[str, str], name: str) -> bool:
    return any(key.lower() == name.lower() for key in headers)
