"""Configuration loading and validation."""

from .models import (
    AppConfig,
    ApiConfig,
    ThrottleConfig,
    LoggingConfig,
)
from .loader import ConfigError, load_app_config, write_default_config

__all__ = [
    # Config models
    "AppConfig",
    "ApiConfig",
    "ThrottleConfig",
    "LoggingConfig",
    # Loaders
    "ConfigError",
    "load_app_config",
    "write_default_config",
]
