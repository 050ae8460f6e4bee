"""Runtime configuration resolver - CLI > env > file > defaults."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from op_finder.config.defaults import DEFAULT_CONFIG_FILENAME
from op_finder.config.enums import ConfigSource
from op_finder.config.env_vars import EnvVar, get_env, get_env_int, get_env_list
from op_finder.config.models import ConfigOverride, FinderConfig

logger = logging.getLogger(__name__)

# Integer settings that may come from the environment
_INT_ENV_VARS: dict[str, EnvVar] = {
    "keep": EnvVar.KEEP,
    "progress_step": EnvVar.PROGRESS_STEP,
    "max_workers": EnvVar.MAX_WORKERS,
}


def _env_overrides() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for field_name, var in _INT_ENV_VARS.items():
        value = get_env_int(var)
        if value is not None and value > 0:
            values[field_name] = value

    simple_types = get_env_list(EnvVar.SIMPLE_TYPES)
    if simple_types:
        values["simple_types"] = simple_types
    return values


def config_path_from_env(config_path: str | Path | None = None) -> Path:
    """Pick the config file: explicit path, then env, then the default name."""
    if config_path is not None:
        return Path(config_path)
    return Path(get_env(EnvVar.CONFIG_FILE) or DEFAULT_CONFIG_FILENAME)


def resolve_config(
    config_path: str | Path | None = None,
    cli_overrides: ConfigOverride | None = None,
) -> FinderConfig:
    """Resolve the effective configuration with 4-tier priority.

    Priority (highest to lowest):
    1. CLI overrides (ConfigOverride)
    2. Environment variables
    3. File config (FinderConfig)
    4. Defaults
    """
    path = config_path_from_env(config_path)
    file_config = FinderConfig.load_sync(path)
    source = ConfigSource.FILE if path.exists() else ConfigSource.DEFAULT
    logger.debug(f"Base configuration from {source.value}: {path}")

    update = _env_overrides()
    for key, value in update.items():
        logger.debug(f"Config {key} from {ConfigSource.ENV.value}: {value}")

    if cli_overrides is not None:
        for key, value in cli_overrides.as_update().items():
            logger.debug(f"Config {key} from {ConfigSource.CLI.value}: {value}")
            update[key] = value

    if not update:
        return file_config

    # Re-validate so overrides get the same constraints as file values
    merged = file_config.model_dump()
    merged.update(update)
    return FinderConfig.model_validate(merged)
