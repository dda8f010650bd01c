"""Configuration settings for the Maiga MCP server.

All settings are loaded from environment variables with the MAIGA_ prefix.
The partner API token is required; everything else has a sensible default.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.maiga.ai"


class MaigaSettings(BaseSettings):
    """Runtime configuration for the Maiga partner API toolbox.

    For example:
        MAIGA_API_TOKEN=...
        MAIGA_DEBUG=true
        MAIGA_TRANSPORT_TYPE=http
    """

    model_config = SettingsConfigDict(
        env_prefix="MAIGA_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Upstream API configuration
    api_token: str = Field(
        description="Partner API token for Maiga API authentication",
        min_length=1,
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Maiga partner API",
    )
    request_timeout: float = Field(
        default=30.0,
        description="HTTP timeout (seconds) applied to partner API requests",
        gt=0.0,
    )
    debug: bool = Field(
        default=False,
        description="Log request URLs, bodies and raw responses",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    # Transport configuration
    transport_type: Literal["stdio", "http", "sse"] = Field(
        default="stdio",
        description="MCP transport protocol",
    )
    http_host: str = Field(
        default="127.0.0.1",
        description="Host address for HTTP/SSE transport",
    )
    http_port: int = Field(
        default=8002,
        description="Port number for HTTP/SSE transport",
        ge=1,
        le=65535,
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v


@lru_cache(maxsize=1)
def get_settings() -> MaigaSettings:
    """Return cached settings instance."""

    return MaigaSettings()
