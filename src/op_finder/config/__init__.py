"""
Configuration management for op-finder.

Pydantic-based configuration with env/CLI overrides.
"""

from op_finder.config.enums import ConfigSource, LogFormat, ViewMode
from op_finder.config.env_vars import EnvVar, get_env, get_env_bool, get_env_int
from op_finder.config.models import ConfigOverride, FinderConfig
from op_finder.config.runtime import resolve_config

__all__ = [
    "FinderConfig",
    "ConfigOverride",
    "resolve_config",
    # Enums
    "ViewMode",
    "ConfigSource",
    "LogFormat",
    # Environment
    "EnvVar",
    "get_env",
    "get_env_bool",
    "get_env_int",
]
