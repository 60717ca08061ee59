"""
Configuration loading utilities.

Supports environment variable interpolation in the YAML file and a log
level override from the environment.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from jsv.config.settings import JsvConfig
from jsv.errors import ConfigError

DEFAULT_CONFIG_FILE = Path("jsv.yaml")
CONFIG_ENV_VAR = "JSV_CONFIG"
LOG_LEVEL_ENV_VAR = "JSV_LOG_LEVEL"


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def load_yaml(path: Path) -> dict[str, Any]:
    """
    Load a YAML mapping and process environment variables.

    Raises:
        ConfigError: If the file cannot be read or parsed, or is not a mapping.
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        msg = f"failed to open config file ({path}): {e.strerror or e}"
        raise ConfigError(msg) from e
    except yaml.YAMLError as e:
        msg = f"failed to parse config file ({path}): {e}"
        raise ConfigError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"config file ({path}) must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _process_config_values(data)


def _find_config_file() -> Path | None:
    """Locate the config file from JSV_CONFIG or the working directory."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if DEFAULT_CONFIG_FILE.exists():
        return DEFAULT_CONFIG_FILE
    return None


def load_config(config_path: Path | None = None) -> JsvConfig:
    """
    Load run configuration.

    Lookup order for the file: explicit path, then $JSV_CONFIG, then
    ./jsv.yaml. Without a file all defaults apply. A relative schema_path in
    the file is resolved against the file's directory. $JSV_LOG_LEVEL
    overrides log_level.

    Args:
        config_path: Optional explicit path to a YAML config file.

    Returns:
        Validated JsvConfig instance.

    Raises:
        ConfigError: If the file is missing, unparseable or has invalid values.
    """
    if config_path is None:
        config_path = _find_config_file()

    data: dict[str, Any] = {}
    if config_path is not None:
        data = load_yaml(config_path)
        schema_path = data.get("schema_path")
        if isinstance(schema_path, str) and not Path(schema_path).is_absolute():
            data["schema_path"] = config_path.parent / schema_path

    level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if level:
        data["log_level"] = level

    try:
        return JsvConfig(**data)
    except ValidationError as e:
        source = str(config_path) if config_path is not None else "environment"
        msg = f"invalid configuration ({source}): {e}"
        raise ConfigError(msg) from e
