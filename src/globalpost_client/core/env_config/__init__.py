"""
Environment configuration for GlobalPost client.

Example:
    >>> from globalpost_client.core.env_config import load_from_env
    >>>
    >>> client = load_from_env()  # None when no token for the selected mode
    >>> client = load_from_env(env_file=".env.production", max_retries=2)
"""

from .loader import build_logger, load_from_env, load_settings, print_config_summary
from .validator import GlobalPostSettings

__all__ = [
    "load_from_env",
    "load_settings",
    "build_logger",
    "print_config_summary",
    "GlobalPostSettings",
]
