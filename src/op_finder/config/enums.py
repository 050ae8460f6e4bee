"""Configuration enums - no magic strings!"""

from __future__ import annotations

from enum import Enum


class ViewMode(str, Enum):
    """Which of the two independent tree/index pairs is active."""

    SIMPLE = "simple"  # user view: simplified signatures, eligible ops only
    ADVANCED = "advanced"  # developer view: every op, keyed on owner type

    @classmethod
    def from_flag(cls, simple: bool) -> "ViewMode":
        """Map the boolean mode flag onto a view."""
        return cls.SIMPLE if simple else cls.ADVANCED

    @property
    def is_simple(self) -> bool:
        return self is ViewMode.SIMPLE


class ConfigSource(str, Enum):
    """Configuration value source for priority resolution."""

    CLI = "cli"
    ENV = "env"
    FILE = "file"
    DEFAULT = "default"


class LogFormat(str, Enum):
    """Console log formats understood by setup_logging."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"
