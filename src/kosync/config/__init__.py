"""Configuration package for the sync server."""

from kosync.config.app_config import (
    ConfigError,
    ServerConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "ConfigError",
    "ServerConfig",
    "clear_config_cache",
    "load_app_config",
]
