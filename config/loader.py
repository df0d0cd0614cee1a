"""
Configuration loader.

Loads configuration from:
1. Default values (built-in)
2. TOML config file (turtlestack.toml or ~/.config/turtlestack/config.toml)
3. Environment variables (a .env file in the working directory is honoured)

Priority: env vars > config file > defaults
"""

import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from .schema import EngineConfig, IndicatorsConfig

logger = logging.getLogger(__name__)

# Config file search paths (in priority order)
CONFIG_PATHS = [
    Path("turtlestack.toml"),                               # Current directory
    Path(".turtlestack.toml"),                              # Hidden in current directory
    Path.home() / ".config" / "turtlestack" / "config.toml",  # User config
    Path("/etc/turtlestack/config.toml"),                   # System config
]

# Environment variable prefix
ENV_PREFIX = "TURTLESTACK_"


class ConfigError(Exception):
    """Configuration error with helpful message."""

    def __init__(self, message: str, source: str | None = None, field: str | None = None):
        self.source = source
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.source:
            parts.append(f"Source: {self.source}")
        if self.field:
            parts.append(f"Field: {self.field}")
        return " | ".join(parts)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load TOML file if it exists."""
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        logger.info(f"Loaded config from: {path}")
        return data
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to parse TOML: {e}", source=str(path)) from e


def _find_config_file() -> Path | None:
    """Find the first existing config file."""
    for path in CONFIG_PATHS:
        if path.exists():
            return path
    return None


def _load_env_overrides() -> dict[str, Any]:
    """
    Collect overrides from TURTLESTACK_* environment variables.

    TURTLESTACK_INDICATORS is a comma-separated default indicator list,
    TURTLESTACK_INTERVAL and TURTLESTACK_LOOKBACK_DAYS set the data source,
    and every indicator parameter can be set by its upper-cased field name
    (TURTLESTACK_RSI_PERIOD=21). Values stay strings; pydantic coerces them.
    """
    overrides: dict[str, Any] = {}

    if names := os.environ.get(f"{ENV_PREFIX}INDICATORS"):
        overrides["default_indicators"] = [n.strip() for n in names.split(",") if n.strip()]

    if interval := os.environ.get(f"{ENV_PREFIX}INTERVAL"):
        overrides.setdefault("data_source", {})["default_interval"] = interval.strip()

    if lookback := os.environ.get(f"{ENV_PREFIX}LOOKBACK_DAYS"):
        overrides.setdefault("data_source", {})["lookback_days"] = lookback.strip()

    for name in IndicatorsConfig.model_fields:
        if value := os.environ.get(f"{ENV_PREFIX}{name.upper()}"):
            value = value.strip()
            overrides.setdefault("indicators", {})[name] = value.lower() if name == "ema_seed" else value

    return overrides


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | str | None = None) -> EngineConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Explicit path to config file (optional)

    Returns:
        Validated EngineConfig

    Raises:
        ConfigError: If configuration is invalid
    """
    config_data: dict[str, Any] = {}

    # Load from config file
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", source=str(path))
        config_data = _load_toml_file(path)
    else:
        found_path = _find_config_file()
        if found_path:
            config_data = _load_toml_file(found_path)

    # Environment wins over the file
    load_dotenv(override=False)
    env_overrides = _load_env_overrides()
    if env_overrides:
        config_data = _deep_merge(config_data, env_overrides)
        logger.debug(f"Applied {len(env_overrides)} override section(s) from environment")

    # Validate and create config
    try:
        config = EngineConfig(**config_data)
    except ValidationError as e:
        errors = e.errors()
        if errors:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get("loc", []))
            msg = first_error.get("msg", "Validation error")
            raise ConfigError(f"Invalid configuration: {msg}", field=field) from e
        raise ConfigError(f"Invalid configuration: {e}") from e

    return config


@lru_cache
def get_config() -> EngineConfig:
    """
    Get singleton configuration instance.

    Uses LRU cache to ensure config is loaded only once.
    """
    return load_config()


def reload_config() -> EngineConfig:
    """
    Force reload configuration.

    Clears the cache and reloads from file/environment.
    """
    get_config.cache_clear()
    return get_config()
