# op_finder/registry/source.py
"""Registry sources - where op entries and type relations come from."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from op_finder.registry.models import RegistryDocument, RegistryEntry

logger = logging.getLogger(__name__)


class RegistryLoadError(Exception):
    """Raised when a registry snapshot cannot be read or validated."""


@runtime_checkable
class RegistrySource(Protocol):
    """What the indexer needs from a registry."""

    def entries(self) -> Iterable[RegistryEntry]:
        """Enumerate every op entry (read once per index build)."""
        ...

    def is_assignable(self, type_name: str, target: str) -> bool:
        """True if a value of *type_name* can be used where *target* is expected."""
        ...


class StaticRegistrySource:
    """In-memory registry backed by a supertype map."""

    def __init__(
        self,
        entries: Iterable[RegistryEntry],
        supertypes: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        self._entries = list(entries)
        self._supertypes = {k: tuple(v) for k, v in (supertypes or {}).items()}
        self._ancestors: dict[str, frozenset[str]] = {}

    @classmethod
    def from_document(cls, document: RegistryDocument) -> StaticRegistrySource:
        return cls(document.ops, document.types)

    def entries(self) -> list[RegistryEntry]:
        return list(self._entries)

    def ancestors(self, type_name: str) -> frozenset[str]:
        """*type_name* plus all of its transitive supertypes."""
        cached = self._ancestors.get(type_name)
        if cached is not None:
            return cached

        seen = {type_name}
        stack = [type_name]
        while stack:
            for parent in self._supertypes.get(stack.pop(), ()):
                if parent not in seen:
                    seen.add(parent)
                    stack.append(parent)

        result = frozenset(seen)
        self._ancestors[type_name] = result
        return result

    def is_assignable(self, type_name: str, target: str) -> bool:
        return target in self.ancestors(type_name)

    def __len__(self) -> int:
        return len(self._entries)


class JsonRegistrySource(StaticRegistrySource):
    """Registry snapshot loaded from a JSON document.

    Expected layout::

        {
          "types": {"ArrayImg": ["Img"], "Img": ["RandomAccessibleInterval"]},
          "ops": [{"name": "gauss", "namespace": "filter", ...}]
        }
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        document = self._read(path)
        super().__init__(document.ops, document.types)
        logger.debug(f"Loaded {len(document.ops)} registry entries from {path}")

    @staticmethod
    def _read(path: Path) -> RegistryDocument:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise RegistryLoadError(f"Registry file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise RegistryLoadError(f"Registry file is not valid JSON: {path}: {e}") from e

        # A bare list is accepted as the op list without type relations
        if isinstance(data, list):
            data = {"ops": data}

        try:
            return RegistryDocument.model_validate(data)
        except ValidationError as e:
            raise RegistryLoadError(f"Invalid registry document {path}: {e}") from e
