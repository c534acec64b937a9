# -*- coding: utf-8 -*-
"""Location: ./twitch_oauth2/config.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0

Library configuration using pydantic-settings.

Every setting can be provided through an environment variable prefixed with
``TWITCH_`` or a ``.env`` file. Endpoint URLs default to ``id.twitch.tv`` and
can be pointed at a mock server, e.g. the ``twitch-cli`` mock API::

    TWITCH_OAUTH2_URL=http://localhost:8080/auth/
    TWITCH_MOCK_API=true

Examples:
    >>> settings = Settings(oauth2_url="http://localhost:8080/auth/")
    >>> settings.token_url
    'http://localhost:8080/auth/token'
"""

# Standard
from functools import lru_cache
from typing import Optional

# Third-Party
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# First-Party
from twitch_oauth2 import __version__

DEFAULT_OAUTH2_URL = "https://id.twitch.tv/oauth2/"


class Settings(BaseSettings):
    """Settings loaded from ``TWITCH_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TWITCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Endpoints
    oauth2_url: str = Field(default=DEFAULT_OAUTH2_URL, description="Root of the id.twitch.tv OAuth2 endpoints")
    oauth2_auth_url: Optional[str] = Field(default=None, description="Override for the authorization endpoint")
    oauth2_token_url: Optional[str] = Field(default=None, description="Override for the token endpoint")
    oauth2_validate_url: Optional[str] = Field(default=None, description="Override for the validation endpoint")
    oauth2_revoke_url: Optional[str] = Field(default=None, description="Override for the revocation endpoint")
    oauth2_device_url: Optional[str] = Field(default=None, description="Override for the device authorization endpoint")

    # The twitch-cli mock API answers without a JSON content type
    mock_api: bool = Field(default=False, description="Relax response checks for mock servers")

    # HTTP
    http_timeout: float = Field(default=30.0, gt=0, description="Timeout in seconds for requests made by the default client")
    user_agent: str = Field(default=f"twitch_oauth2/{__version__}", description="User-Agent sent by the default client")

    # Logging
    log_level: str = Field(default="INFO", description="Log level for the twitch_oauth2 logger")
    log_format: str = Field(default="text", description="Log format: text or json")
    log_file: Optional[str] = Field(default=None, description="Optional path of a rotating JSON log file")

    @field_validator("oauth2_url")
    @classmethod
    def _ensure_trailing_slash(cls, v: str) -> str:
        """Endpoint paths are joined onto the root, so it must end with a slash."""
        return v if v.endswith("/") else v + "/"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in {"text", "json"}:
            raise ValueError(f"Invalid log format: {v}. Must be 'text' or 'json'")
        return fmt

    @property
    def auth_url(self) -> str:
        """Authorization URL, ``https://id.twitch.tv/oauth2/authorize`` by default."""
        return self.oauth2_auth_url or self.oauth2_url + "authorize"

    @property
    def token_url(self) -> str:
        """Token URL, ``https://id.twitch.tv/oauth2/token`` by default."""
        return self.oauth2_token_url or self.oauth2_url + "token"

    @property
    def validate_url(self) -> str:
        """Validation URL, ``https://id.twitch.tv/oauth2/validate`` by default."""
        return self.oauth2_validate_url or self.oauth2_url + "validate"

    @property
    def revoke_url(self) -> str:
        """Revocation URL, ``https://id.twitch.tv/oauth2/revoke`` by default."""
        return self.oauth2_revoke_url or self.oauth2_url + "revoke"

    @property
    def device_url(self) -> str:
        """Device authorization URL, ``https://id.twitch.tv/oauth2/device`` by default."""
        return self.oauth2_device_url or self.oauth2_url + "device"


@lru_cache()
def get_settings(**kwargs) -> Settings:
    """Get the cached settings.

    Keyword arguments override environment values, which is mostly useful in tests.

    Returns:
        Settings: Library settings.
    """
    return Settings(**kwargs)
