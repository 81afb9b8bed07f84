"""Configuration for the Catapult SDK."""

from catapult.config.settings import (
    DEFAULT_BASE_URL,
    ClientConfig,
    LoggingConfig,
    get_default_config_path,
    load_config,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "LoggingConfig",
    "get_default_config_path",
    "load_config",
]
