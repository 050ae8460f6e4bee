"""Environment variable names - centralized, type-safe, no magic strings!

All environment variable access should go through this module.
"""

from __future__ import annotations

import os
from enum import Enum


class EnvVar(str, Enum):
    """All environment variable names used by op-finder.

    Use these instead of hardcoded strings for type safety.
    """

    # ================================================================
    # Filtering
    # ================================================================
    KEEP = "OP_FINDER_KEEP"
    PROGRESS_STEP = "OP_FINDER_PROGRESS_STEP"
    MAX_WORKERS = "OP_FINDER_MAX_WORKERS"

    # ================================================================
    # Views
    # ================================================================
    SIMPLE_MODE = "OP_FINDER_SIMPLE_MODE"
    SIMPLE_TYPES = "OP_FINDER_SIMPLE_TYPES"

    # ================================================================
    # Logging / Paths
    # ================================================================
    LOG_LEVEL = "OP_FINDER_LOG_LEVEL"
    LOG_FILE = "OP_FINDER_LOG_FILE"
    CONFIG_FILE = "OP_FINDER_CONFIG"


# ================================================================
# Type-Safe Helper Functions
# ================================================================


def get_env(var: EnvVar, default: str | None = None) -> str | None:
    """Get environment variable value (type-safe).

    Example:
        >>> keep = get_env(EnvVar.KEEP, "1")
    """
    return os.getenv(var.value, default)


def is_set(var: EnvVar) -> bool:
    """Check if environment variable is set (even if empty string)."""
    return var.value in os.environ


def get_env_int(var: EnvVar, default: int | None = None) -> int | None:
    """Get environment variable as integer.

    Args:
        var: EnvVar enum member
        default: Default value if not set or invalid

    Returns:
        Integer value or default
    """
    value = get_env(var)
    if value is None:
        return default

    try:
        return int(value)
    except ValueError:
        return default


def get_env_bool(var: EnvVar, default: bool = False) -> bool:
    """Get environment variable as boolean.

    Returns:
        Boolean value (true for "1", "true", "yes", "on", case-insensitive)
    """
    value = get_env(var)
    if value is None:
        return default

    return value.lower() in ("1", "true", "yes", "on")


def get_env_list(
    var: EnvVar, separator: str = ",", default: list[str] | None = None
) -> list[str]:
    """Get environment variable as list of strings.

    Example:
        >>> get_env_list(EnvVar.SIMPLE_TYPES)
        # "Img, Dataset" -> ["Img", "Dataset"]
    """
    value = get_env(var)
    if value is None:
        return default or []

    return [item.strip() for item in value.split(separator) if item.strip()]
