"""Utility modules for GlobalPost client."""

from .sanitizer import (
    FILTERED,
    MAX_VALUE_LENGTH,
    is_sensitive_key,
    mask_context,
    mask_token,
    truncate_value,
)

__all__ = [
    'FILTERED',
    'MAX_VALUE_LENGTH',
    'is_sensitive_key',
    'mask_context',
    'mask_token',
    'truncate_value',
]
