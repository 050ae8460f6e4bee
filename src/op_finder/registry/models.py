# op_finder/registry/models.py
"""Pydantic models for registry entries as handed to the indexer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class OpParameter(BaseModel):
    """A typed input or output of an op."""

    type_name: str
    name: str = ""
    required: bool = True

    model_config = {"frozen": True, "extra": "ignore"}


class RegistryEntry(BaseModel):
    """One op as enumerated from the registry.

    ``name`` and ``namespace`` may be absent; the indexer falls back to
    ``fallback_name`` and the no-namespace label respectively.
    """

    name: str | None = None
    fallback_name: str = ""
    namespace: str | None = None
    signature: str = ""
    owner_type: str = ""
    invocation: str | None = None
    inputs: list[OpParameter] = Field(default_factory=list)
    outputs: list[OpParameter] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "ignore"}

    @property
    def input_types(self) -> list[str]:
        return [param.type_name for param in self.inputs]


class RegistryDocument(BaseModel):
    """On-disk registry snapshot: a supertype map plus the op list."""

    types: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Type name -> direct supertypes (classes and interfaces)",
    )
    ops: list[RegistryEntry] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "ignore"}


__all__ = [
    "OpParameter",
    "RegistryEntry",
    "RegistryDocument",
]
