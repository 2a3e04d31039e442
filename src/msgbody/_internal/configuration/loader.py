"""Configuration loader module.

This module loads configuration from a YAML file and the environment and
transforms it into a validated RegistryConfig object.
"""

import os
import re
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from msgbody._internal.configuration.schemas import RegistryConfig
from msgbody.core.exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = "msgbody.yaml"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Environment keys whose underscores are part of a field name.
_KEY_MAPPINGS = {
    "DISCOVER_ENTRY_POINTS": ["discover_entry_points"],
    "READER_GROUP": ["reader_group"],
    "WRITER_GROUP": ["writer_group"],
    "LOGGING_LEVEL": ["logging", "level"],
    "LOGGING_FORMAT": ["logging", "format"],
}


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values that override the base

    Returns:
        Merged dictionary where override values take precedence
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def resolve_env_vars(value: Any) -> Any:
    """Replace ``${VAR}`` patterns in strings, recursing into dicts and lists."""

    if isinstance(value, dict):
        return {key: resolve_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [resolve_env_vars(item) for item in value]
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda match: os.environ.get(match.group(1), ""), value)
    return value


def load_yaml_file(path: str) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path}")
    return data


def _normalize_env_key(env_key: str) -> List[str]:
    if env_key in _KEY_MAPPINGS:
        return _KEY_MAPPINGS[env_key]
    if env_key.startswith("LOGGING_COMPONENTS_"):
        component = env_key[len("LOGGING_COMPONENTS_"):].lower()
        return ["logging", "components", component]
    return env_key.lower().split("_")


def _convert_env_value(value: str) -> Any:
    lowered = value.lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    return value


def load_from_env(prefix: str = "MSGBODY") -> Dict[str, Any]:
    """Load configuration from environment variables with given prefix.

    ``<PREFIX>_CONFIG`` names the config file and is not treated as a setting.
    """
    result: Dict[str, Any] = {}
    prefix_upper = f"{prefix.upper()}_"

    for key, value in os.environ.items():
        if not key.startswith(prefix_upper):
            continue
        env_key = key[len(prefix_upper):]
        if env_key == "CONFIG" or not env_key:
            continue

        path = _normalize_env_key(env_key)
        current = result
        for part in path[:-1]:
            current = current.setdefault(part, {})
        current[path[-1]] = _convert_env_value(value)

    return result


def load_config(file_path: Optional[str] = None, env_prefix: str = "MSGBODY") -> RegistryConfig:
    """Load RegistryConfig from file and environment.

    Args:
        file_path: Path to config file (defaults to ``<PREFIX>_CONFIG`` from env
            or ``msgbody.yaml``). A missing file is treated as empty.
        env_prefix: Prefix for environment variables

    Returns:
        Validated RegistryConfig instance

    Raises:
        ConfigurationError: On loading or validation failure
    """
    path = file_path or os.environ.get(f"{env_prefix}_CONFIG", DEFAULT_CONFIG_FILE)

    config_data: Dict[str, Any] = {}
    if os.path.exists(path):
        config_data = merge_dicts(config_data, load_yaml_file(path))

    env_config = load_from_env(env_prefix)
    if env_config:
        config_data = merge_dicts(config_data, env_config)

    config_data = resolve_env_vars(config_data)

    try:
        return RegistryConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e
