"""Server configuration loader.

Loads configuration from data/config/kosync_v1.yaml when present, then
applies KOSYNC_* environment overrides on top of the built-in defaults.

Usage:
    from kosync.config.app_config import load_app_config

    config = load_app_config()
    store = RedisStore.from_url(config.redis_url)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import structlog
import yaml

from kosync.db.store import DEFAULT_REDIS_URL

logger = structlog.get_logger(__name__)

# Config file path (relative to working directory)
CONFIG_FILE = Path("data/config/kosync_v1.yaml")

ENV_PREFIX = "KOSYNC_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}

# Level names understood by both structlog and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class ConfigError(Exception):
    """Invalid configuration value."""

    pass


@dataclass(frozen=True)
class ServerConfig:
    """Process-level settings for the sync server."""

    host: str = "0.0.0.0"
    port: int = 3030
    redis_url: str = DEFAULT_REDIS_URL
    log_level: str = "INFO"
    json_logs: bool = False

    def with_overrides(self, **overrides: Any) -> ServerConfig:
        """Return a copy with the non-None overrides applied (CLI options).

        Raises:
            ConfigError: If an override fails the same checks as file values.
        """
        changes = _parse_config(overrides)
        return replace(self, **changes) if changes else self


# Module-level cache
_cached_config: ServerConfig | None = None


def _coerce(name: str, value: Any, target: type) -> Any:
    """Convert a raw YAML/env value to the field's type."""
    if target is bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ConfigError(f"{name}: expected a boolean, got {value!r}")
    if target is int:
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name}: expected an integer, got {value!r}") from e
        if not 0 < number < 65536:
            raise ConfigError(f"{name}: {number} is not a valid port")
        return number
    if name == "log_level":
        level = str(value).strip().upper()
        level = LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"{name}: expected one of {', '.join(LOG_LEVELS)}, got {value!r}"
            )
        return level
    return str(value)


def _field_types() -> dict[str, type]:
    types = {"bool": bool, "int": int, "str": str}
    return {f.name: types.get(str(f.type), str) for f in fields(ServerConfig)}


def _parse_config(data: dict[str, Any]) -> dict[str, Any]:
    """Validate and coerce known keys; unknown keys are ignored."""
    result = {}
    for name, target in _field_types().items():
        if name in data and data[name] is not None:
            result[name] = _coerce(name, data[name], target)
    return result


def _env_overrides() -> dict[str, Any]:
    """Collect KOSYNC_<FIELD> environment variables."""
    return {
        name: os.environ[ENV_PREFIX + name.upper()]
        for name in _field_types()
        if ENV_PREFIX + name.upper() in os.environ
    }


def load_app_config(force_reload: bool = False) -> ServerConfig:
    """Load server config: defaults <- YAML file <- environment.

    Args:
        force_reload: If True, ignore cached config and reload.

    Returns:
        ServerConfig with all settings.

    Raises:
        ConfigError: If a value cannot be converted to its field type.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any] = {}
    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        loaded = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{CONFIG_FILE}: expected a mapping at top level")
        section = loaded.get("server", loaded)
        if not isinstance(section, dict):
            raise ConfigError(f"{CONFIG_FILE}: 'server' must be a mapping")
        data.update(section)
    else:
        logger.debug("using_default_config")

    data.update(_env_overrides())

    _cached_config = ServerConfig(**_parse_config(data))
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when the environment changes at runtime.
    """
    global _cached_config
    _cached_config = None
