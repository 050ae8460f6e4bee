"""Registry package - op entries and type relations consumed by the indexer."""

from op_finder.registry.models import OpParameter, RegistryDocument, RegistryEntry
from op_finder.registry.source import (
    JsonRegistrySource,
    RegistryLoadError,
    RegistrySource,
    StaticRegistrySource,
)

__all__ = [
    "OpParameter",
    "RegistryDocument",
    "RegistryEntry",
    "RegistrySource",
    "StaticRegistrySource",
    "JsonRegistrySource",
    "RegistryLoadError",
]
