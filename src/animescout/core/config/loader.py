"""
Configuration loader for YAML files.

Loads and validates configuration from YAML files into Pydantic models.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import AppConfig

CONFIG_ENV_VAR = "ANIMESCOUT_CONFIG"
DEFAULT_CONFIG_PATH = Path("configs/app.yaml")

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

DEFAULT_APP_CONFIG = """\
# AnimeScout Configuration

# External anime API
api:
  base_url: ${JIKAN_BASE_URL:-https://api.jikan.moe/v4/anime}
  page_size: 24
  timeout_seconds: 30

# Minimum spacing between API calls
throttle:
  min_interval_ms: 1000
  hosts:
    - api.jikan.moe

# Logging settings
logging:
  level: WARNING
  file: null
  json_format: true
  rich_console: true
"""


class ConfigError(Exception):
    """Configuration loading or validation error."""

    def __init__(self, message: str, path: Path | None = None, details: str | None = None):
        self.path = path
        self.details = details
        super().__init__(message)


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dictionary.

    Raises:
        ConfigError: If file cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}", path=path, details=str(e)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}", path=path, details=str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Top level of {path} must be a mapping", path=path)
    return data


def _expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in string values."""
    if isinstance(data, str):
        return _ENV_PATTERN.sub(
            lambda m: os.environ.get(m.group(1), m.group(2) or ""),
            data,
        )
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    return data


def resolve_config_path(path: Path | str | None = None) -> Path:
    """Pick the config file: explicit path, then $ANIMESCOUT_CONFIG, then the default."""
    if path is not None:
        return Path(path)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env)
    return DEFAULT_CONFIG_PATH


def load_app_config(
    path: Path | str | None = None,
    expand_env: bool = True,
) -> AppConfig:
    """Load application configuration from YAML file.

    Args:
        path: Path to app.yaml (default: $ANIMESCOUT_CONFIG or configs/app.yaml)
        expand_env: Whether to expand environment variables

    Returns:
        Validated AppConfig instance; defaults if the file does not exist

    Raises:
        ConfigError: If configuration is invalid
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Configuration file not found: {config_path}", path=config_path)
        return AppConfig()

    data = _load_yaml_file(config_path)

    if expand_env:
        data = _expand_env_vars(data)

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid app configuration in {config_path}",
            path=config_path,
            details=str(e),
        ) from e


def write_default_config(path: Path | str = DEFAULT_CONFIG_PATH, force: bool = False) -> bool:
    """Write the default app.yaml.

    Returns:
        True if the file was written, False if it existed and force was not set
    """
    path = Path(path)
    if path.exists() and not force:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_APP_CONFIG, encoding="utf-8")
    return True
