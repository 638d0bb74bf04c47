"""
Pydantic-based configuration settings for the Neverstale SDK.

Author: Neverstale
Date: 2026-10-19
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URI = "https://app.neverstale.io/api/v1/"


class NeverstaleSettings(BaseSettings):
    """
    Configuration settings for Neverstale clients.

    Configuration can be provided via:
    - Environment variables with NEVERSTALE_ prefix
    - .env file in current directory
    - Direct instantiation with kwargs

    Example:
        ```python
        # From environment (NEVERSTALE_API_KEY=...)
        settings = NeverstaleSettings()

        # Direct configuration
        settings = NeverstaleSettings(api_key="...", timeout_seconds=10)
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="NEVERSTALE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = None
    base_uri: str = DEFAULT_BASE_URI
    timeout_seconds: float = Field(default=30.0, gt=0)
    verify_ssl: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("base_uri")
    @classmethod
    def validate_base_uri(cls, v: str) -> str:
        """Require an absolute http(s) address."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base URI: {v}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings(env_file: str | None = None) -> NeverstaleSettings:
    """
    Get cached settings instance.

    To reload settings, clear the cache with `get_settings.cache_clear()`.
    """
    if env_file:
        return NeverstaleSettings(_env_file=env_file)

    if Path(".env").exists():
        return NeverstaleSettings(_env_file=".env")

    return NeverstaleSettings()
