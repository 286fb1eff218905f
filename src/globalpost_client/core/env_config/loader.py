"""
Client factory from environment variables and .env files.
"""

from typing import Optional

from ..client import GlobalPostClient
from ..logging.config import LoggingConfig
from ..logging.logger import GlobalPostLogger
from ...utils.sanitizer import mask_token
from .validator import GlobalPostSettings


def load_settings(env_file: Optional[str] = None, **overrides) -> GlobalPostSettings:
    """
    Load GlobalPostSettings.

    Priority (highest to lowest):
    1. **overrides - explicit parameters
    2. Environment variables (GLOBALPOST_*)
    3. .env file
    4. Defaults
    """
    if env_file is not None:
        return GlobalPostSettings(_env_file=env_file, **overrides)
    return GlobalPostSettings(**overrides)


def build_logger(settings: GlobalPostSettings) -> GlobalPostLogger:
    """GlobalPostLogger configured from settings (DEBUG level when debug_log is on)."""
    config = LoggingConfig(
        level="DEBUG" if settings.debug_log else settings.log_level,
        format=settings.log_format,
        console=settings.log_console,
        file_path=settings.log_file_path,
    )
    return GlobalPostLogger(config)


def load_from_env(env_file: Optional[str] = None, **overrides) -> Optional[GlobalPostClient]:
    """
    Build GlobalPostClient from environment.

    Returns None when no token is configured for the selected mode.

    Example:
        >>> client = load_from_env()
        >>> client = load_from_env(env_file=".env.staging", max_retries=2)
    """
    settings = load_settings(env_file, **overrides)

    if not settings.active_token:
        return None

    return GlobalPostClient(
        settings.active_token,
        settings.api_mode,
        settings.to_client_config(),
        logger=build_logger(settings),
    )


def print_config_summary(settings: GlobalPostSettings, mask_secrets: bool = True):
    """
    Print configuration summary.

    Example:
        >>> print_config_summary(load_settings())
        GlobalPostSettings:
          mode: TEST
          ...
    """
    token = settings.active_token
    print("GlobalPostSettings:")
    print(f"  mode: {settings.api_mode.value} ({settings.api_mode.base_url})")
    print(f"  token: {mask_token(token) if mask_secrets else token}")
    print(f"  timeout: connect={settings.connect_timeout}s, read={settings.timeout}s")
    print(f"  retry: max_retries={settings.max_retries}, delay={settings.retry_delay}s")
    print(f"  verify_ssl: {settings.verify_ssl}, debug: {settings.debug_log}")
    print(f"  logging: level={settings.log_level}, format={settings.log_format}")
    if settings.log_file_path:
        print(f"    file: {settings.log_file_path}")
