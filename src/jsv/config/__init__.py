"""
Configuration management with typed Pydantic models.

Settings come from defaults, an optional YAML file and environment
overrides.
"""

from jsv.config.loader import load_config
from jsv.config.settings import DEFAULT_SCHEMA_PATH, JsvConfig, LogLevel

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "JsvConfig",
    "LogLevel",
    "load_config",
]
