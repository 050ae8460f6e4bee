# op_finder/commands/common.py
"""Shared plumbing for the CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from chuk_term.ui import output
from pydantic import ValidationError

from op_finder.config.env_vars import EnvVar, get_env_bool, is_set
from op_finder.config.models import ConfigOverride, FinderConfig
from op_finder.config.runtime import resolve_config
from op_finder.finder.index import OpIndex
from op_finder.registry.source import JsonRegistrySource, RegistryLoadError
from op_finder.utils.preferences import get_preference_manager

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Global options collected by the app callback."""

    config_file: Optional[str] = None


def load_config(ctx: typer.Context, overrides: ConfigOverride | None = None) -> FinderConfig:
    """Resolve the configuration, exiting with code 1 if it is invalid."""
    app_ctx = ctx.obj if isinstance(ctx.obj, AppContext) else AppContext()
    try:
        return resolve_config(app_ctx.config_file, overrides)
    except (ValidationError, ValueError) as e:
        output.error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1) from e


def resolve_registry(registry: Optional[Path]) -> Path:
    """The registry argument, or the registry used last when it is omitted."""
    if registry is not None:
        return registry
    last = get_preference_manager().get_last_registry()
    if last is None:
        output.error("No registry given and none used before")
        output.hint("Pass the path of a registry JSON file")
        raise typer.Exit(code=1)
    logger.debug(f"Using last registry {last}")
    return Path(last)


def open_registry(registry: Optional[Path]) -> JsonRegistrySource:
    """Read the registry snapshot and remember it, exiting with code 1 on failure."""
    path = resolve_registry(registry)
    try:
        source = JsonRegistrySource(path)
    except RegistryLoadError as e:
        output.error(str(e))
        output.hint("A registry is a JSON document with 'types' and 'ops' keys")
        raise typer.Exit(code=1) from e

    get_preference_manager().set_last_registry(str(path.resolve()))
    return source


def load_index(registry: Optional[Path], config: FinderConfig) -> OpIndex:
    """Read *registry* and build the op index."""
    return OpIndex.build(open_registry(registry), config)


def resolve_simple_mode(flag: Optional[bool]) -> bool:
    """Mode flag priority: command line, then environment, then preferences."""
    if flag is not None:
        return flag
    if is_set(EnvVar.SIMPLE_MODE):
        return get_env_bool(EnvVar.SIMPLE_MODE, default=True)
    return get_preference_manager().get_simple_mode()
