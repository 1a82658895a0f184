"""
Configuration settings for odoorm.

Uses Pydantic Settings to load the server URL, API key, timeouts and log
level from the environment (or a ``.env`` file). Explicit values passed to
``odoorm.configure`` override the environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_TIMEOUT = 30.0
DEFAULT_OPEN_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    # Server
    url: Optional[str] = Field(None, alias="ODOO_URL")
    api_key: Optional[str] = Field(None, alias="ODOO_API_KEY")

    # Transport
    timeout: float = Field(DEFAULT_TIMEOUT, alias="ODOO_TIMEOUT")
    open_timeout: float = Field(DEFAULT_OPEN_TIMEOUT, alias="ODOO_OPEN_TIMEOUT")

    # Logging
    log_level: LogLevel = Field(DEFAULT_LOG_LEVEL, alias="ODOO_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def field_names(cls) -> set[str]:
        """Names accepted as overrides: field names and their ODOO_* aliases."""
        names = set(cls.model_fields)
        names.update(f.alias for f in cls.model_fields.values() if f.alias)
        return names

    def validate_connection(self) -> None:
        """
        Raise ConfigurationError unless a connection can be built from these settings.
        """
        if not self.url:
            raise ConfigurationError("url is required")
        if not self.api_key:
            raise ConfigurationError("api_key is required")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
