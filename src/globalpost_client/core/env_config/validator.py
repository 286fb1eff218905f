"""
Pydantic settings for environment configuration.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import ClientConfig, EndpointMode


class GlobalPostSettings(BaseSettings):
    """
    GlobalPost client configuration from environment variables.

    Reads from:
    1. Environment variables (GLOBALPOST_*)
    2. .env file
    3. Defaults

    Example .env file:
        GLOBALPOST_API_MODE=PROD
        GLOBALPOST_API_TOKEN_PROD=prod-token
        GLOBALPOST_API_TOKEN_TEST=test-token
        GLOBALPOST_MAX_RETRIES=2
        GLOBALPOST_RETRY_DELAY=1.0
        GLOBALPOST_DEBUG_LOG=true
        GLOBALPOST_LOG_FILE_PATH=/var/log/globalpost.log
    """

    model_config = SettingsConfigDict(
        env_prefix='GLOBALPOST_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    api_mode: EndpointMode = Field(default=EndpointMode.TEST)
    api_token_test: str = Field(default="")
    api_token_prod: str = Field(default="")
    debug_log: bool = Field(default=False)

    timeout: float = Field(default=10.0, gt=0)
    connect_timeout: float = Field(default=5.0, gt=0)
    max_retries: int = Field(default=1, ge=0)
    retry_delay: float = Field(default=0.5, ge=0)
    verify_ssl: bool = Field(default=True)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "text", "colored"] = Field(default="text")
    log_console: bool = Field(default=True)
    log_file_path: Optional[str] = None

    @field_validator('api_mode', mode='before')
    @classmethod
    def parse_mode(cls, v) -> EndpointMode:
        """Unknown modes fall back to TEST instead of failing validation."""
        return EndpointMode.parse(v)

    @field_validator('api_token_test', 'api_token_prod', mode='before')
    @classmethod
    def strip_token(cls, v) -> str:
        return (v or "").strip()

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator('log_format', mode='before')
    @classmethod
    def lower_format(cls, v):
        return v.lower() if isinstance(v, str) else v

    @property
    def active_token(self) -> str:
        """Token for the selected mode."""
        if self.api_mode == EndpointMode.PROD:
            return self.api_token_prod
        return self.api_token_test

    def to_client_config(self) -> ClientConfig:
        return ClientConfig(
            timeout=self.timeout,
            connect_timeout=self.connect_timeout,
            max_retries=self.max_retries,
            retry_delay=self.retry_delay,
            debug=self.debug_log,
            verify_ssl=self.verify_ssl,
        )
