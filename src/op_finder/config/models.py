"""Clean Pydantic configuration models - type safe, immutable."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from op_finder.config.defaults import (
    DEFAULT_ADVANCED_DELIMITERS,
    DEFAULT_KEEP,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PROGRESS_STEP,
    DEFAULT_ROOT_INVOCATION,
    DEFAULT_ROOT_LABEL,
    DEFAULT_ROOT_OWNER_TYPE,
    DEFAULT_SIMPLE_TYPES,
    DEFAULT_TYPE_ALIASES,
    NO_NAMESPACE,
)


class FinderConfig(BaseModel):
    """Complete op-finder configuration.

    This is the source of truth loaded from config files. ``resolve_config``
    layers environment and CLI overrides on top of it.
    """

    keep: int = Field(
        default=DEFAULT_KEEP,
        gt=0,
        description="Number of distinct top scores kept by a filter run",
    )
    progress_step: int = Field(
        default=DEFAULT_PROGRESS_STEP,
        gt=0,
        le=100,
        description="Progress/cancellation granularity in percent",
    )
    advanced_delimiters: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ADVANCED_DELIMITERS),
        description="Delimiters used to tokenize owner types",
    )
    simple_types: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SIMPLE_TYPES),
        description="Input types that qualify an op for the user view",
    )
    type_aliases: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_TYPE_ALIASES),
        description="Regex -> label substitutions for simplified signatures",
    )
    no_namespace: str = Field(default=NO_NAMESPACE, min_length=1)
    root_label: str = Field(default=DEFAULT_ROOT_LABEL, min_length=1)
    root_invocation: str = Field(default=DEFAULT_ROOT_INVOCATION, min_length=1)
    root_owner_type: str = DEFAULT_ROOT_OWNER_TYPE
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, gt=0, le=64)

    model_config = {"frozen": True}

    @field_validator("advanced_delimiters")
    @classmethod
    def validate_delimiters(cls, v: list[str]) -> list[str]:
        """Each delimiter must be a single character."""
        for delim in v:
            if len(delim) != 1:
                raise ValueError(f"Delimiter must be a single character: {delim!r}")
        return v

    @classmethod
    def load_sync(cls, config_path: Path) -> FinderConfig:
        """Load from a JSON file; a missing file yields the defaults."""
        if not config_path.exists():
            return cls()

        data = json.loads(config_path.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def save_sync(self, config_path: Path) -> None:
        """Synchronous save."""
        data = self.model_dump(mode="json")
        config_path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class ConfigOverride(BaseModel):
    """Type-safe configuration override from CLI arguments.

    Use this instead of dict[str, Any] for CLI arguments.
    """

    keep: int | None = Field(default=None, gt=0)
    progress_step: int | None = Field(default=None, gt=0, le=100)
    max_workers: int | None = Field(default=None, gt=0, le=64)
    simple_types: list[str] | None = None

    model_config = {"frozen": False}  # Mutable for building

    def as_update(self) -> dict[str, Any]:
        """Only the fields that were actually set."""
        return self.model_dump(exclude_none=True)
