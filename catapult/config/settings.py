"""
Configuration management for the Catapult SDK.

Loads client settings from a YAML file with sensible defaults.
Supports environment variable substitution using ${ENV_VAR} syntax, and
CATAPULT_* environment variables that override file values.
"""

import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from catapult.exceptions import InvalidConfigurationError
from catapult.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.catapult.inetwork.com"

ENV_OVERRIDES = {
    "user_id": "CATAPULT_USER_ID",
    "api_token": "CATAPULT_API_TOKEN",
    "api_secret": "CATAPULT_API_SECRET",
    "base_url": "CATAPULT_BASE_URL",
}


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Examples:
        "${CATAPULT_USER_ID}" -> value of CATAPULT_USER_ID env var
        "${CATAPULT_BASE_URL:https://localhost}" -> env value or the default
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass(frozen=True)
class LoggingConfig:
    """Logging section of the config file, applied by ``Client.from_config``."""

    level: str = "INFO"
    file: str = ""
    format: str = "json"  # "json" or "console"


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable settings of a Catapult client.

    Created once when the client is constructed and never mutated.
    ``logging`` is only set when the config file has a logging section.
    """

    user_id: str
    api_token: str
    api_secret: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    logging: Optional[LoggingConfig] = None

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks
        return (
            f"ClientConfig(user_id={self.user_id!r}, api_token={self.api_token!r}, "
            f"api_secret='***', base_url={self.base_url!r}, timeout={self.timeout!r})"
        )


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.catapult/config.yaml")


def load_config(config_path: Optional[str] = None) -> ClientConfig:
    """
    Load client configuration from a YAML file and the environment.

    The file is optional: when it does not exist, settings come from the
    CATAPULT_* environment variables alone. Environment variables always win
    over file values.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        ClientConfig: Loaded configuration. Credentials are not validated here;
        the client rejects empty credentials when it is constructed.

    Raises:
        InvalidConfigurationError: If the file is malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(config_path)

    config_data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from {config_path}")
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
            raise InvalidConfigurationError(
                f"Failed to parse YAML configuration file '{config_path}': {e}"
            ) from e
        except OSError as e:
            logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
            raise InvalidConfigurationError(
                f"Failed to read configuration file '{config_path}': {e}"
            ) from e
    else:
        logger.info(f"Configuration file not found at {config_path}, using environment")

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping"
        )

    config_data = _expand_env_vars(config_data)

    try:
        return _build_config_from_dict(config_data)
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e


def _build_config_from_dict(config_data: Dict[str, Any]) -> ClientConfig:
    """Build ClientConfig from a (possibly partial) dictionary."""
    values: Dict[str, Any] = {
        "user_id": str(config_data.get("user_id") or ""),
        "api_token": str(config_data.get("api_token") or ""),
        "api_secret": str(config_data.get("api_secret") or ""),
        "base_url": str(config_data.get("base_url") or DEFAULT_BASE_URL),
    }

    for key, env_name in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value:
            values[key] = env_value

    if "timeout" in config_data:
        values["timeout"] = float(config_data["timeout"])

    logging_data = config_data.get("logging")
    if logging_data is not None:
        if not isinstance(logging_data, dict):
            raise ValueError("logging section must be a mapping")
        values["logging"] = LoggingConfig(
            level=str(logging_data.get("level", "INFO")).upper(),
            file=str(logging_data.get("file") or ""),
            format=str(logging_data.get("format", "json")),
        )

    return ClientConfig(**values)
