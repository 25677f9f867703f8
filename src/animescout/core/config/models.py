"""
Pydantic configuration models for AnimeScout.

These models provide type-safe configuration with validation for:
- The external API endpoint
- Request throttling
- Logging
"""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


DEFAULT_BASE_URL = "https://api.jikan.moe/v4/anime"
DEFAULT_PAGE_SIZE = 24
DEFAULT_MIN_INTERVAL_MS = 1000


# =============================================================================
# API Configuration
# =============================================================================


class ApiConfig(BaseModel):
    """External anime API settings."""

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Anime collection endpoint; detail URLs are built beneath it",
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=1,
        le=25,
        description="Results requested per page (the API caps this at 25)",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300.0,
        description="Request timeout in seconds",
    )
    user_agent: str = Field(
        default="animescout/0.1",
        description="User-Agent header sent with every request",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v.rstrip("/")

    @property
    def host(self) -> str:
        return urlparse(self.base_url).hostname or ""


# =============================================================================
# Throttle Configuration
# =============================================================================


class ThrottleConfig(BaseModel):
    """Minimum spacing between outbound API calls."""

    min_interval_ms: int = Field(
        default=DEFAULT_MIN_INTERVAL_MS,
        ge=0,
        le=60_000,
        description="Minimum milliseconds between two calls to a throttled host",
    )
    hosts: list[str] = Field(
        default_factory=lambda: ["api.jikan.moe"],
        description="Hosts the gate applies to; other hosts pass straight through",
    )

    @field_validator("hosts")
    @classmethod
    def normalize_hosts(cls, v: list[str]) -> list[str]:
        return [h.strip().lower() for h in v if h.strip()]


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    json_format: bool = Field(
        default=True,
        description="Use JSON format for file logs",
    )
    rich_console: bool = Field(
        default=True,
        description="Use Rich for console output",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


# =============================================================================
# Application Configuration
# =============================================================================


class AppConfig(BaseModel):
    """Root application configuration.

    This is the main configuration object loaded from app.yaml.
    """

    api: ApiConfig = Field(default_factory=ApiConfig)
    throttle: ThrottleConfig = Field(default_factory=ThrottleConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
