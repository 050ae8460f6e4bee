# tests/registry/test_registry_source.py
"""Tests for registry models and sources."""

import json

import pytest
from pydantic import ValidationError

from op_finder.registry.models import OpParameter, RegistryDocument, RegistryEntry
from op_finder.registry.source import (
    JsonRegistrySource,
    RegistryLoadError,
    RegistrySource,
    StaticRegistrySource,
)


class TestRegistryModels:
    """Tests for the registry pydantic models."""

    def test_entry_defaults(self):
        entry = RegistryEntry()
        assert entry.name is None
        assert entry.namespace is None
        assert entry.signature == ""
        assert entry.inputs == []

    def test_input_types(self):
        entry = RegistryEntry(
            name="gauss",
            inputs=[OpParameter(type_name="Img", name="in"), OpParameter(type_name="double")],
        )
        assert entry.input_types == ["Img", "double"]

    def test_extra_fields_ignored(self):
        entry = RegistryEntry.model_validate({"name": "x", "priority": 100})
        assert entry.name == "x"

    def test_parameter_requires_type(self):
        with pytest.raises(ValidationError):
            OpParameter.model_validate({"name": "in"})

    def test_document(self):
        document = RegistryDocument.model_validate(
            {"types": {"ArrayImg": ["Img"]}, "ops": [{"name": "gauss"}]}
        )
        assert document.types == {"ArrayImg": ["Img"]}
        assert document.ops[0].name == "gauss"


class TestStaticRegistrySource:
    """Tests for StaticRegistrySource."""

    def test_is_registry_source(self):
        assert isinstance(StaticRegistrySource([]), RegistrySource)

    def test_entries(self, entries):
        source = StaticRegistrySource(entries)
        assert source.entries() == entries
        assert len(source) == len(entries)

    def test_assignable_to_itself(self):
        assert StaticRegistrySource([]).is_assignable("Img", "Img")

    def test_transitive_supertypes(self):
        source = StaticRegistrySource(
            [], {"ArrayImg": ["Img"], "Img": ["RandomAccessibleInterval"]}
        )
        assert source.is_assignable("ArrayImg", "RandomAccessibleInterval")
        assert not source.is_assignable("RandomAccessibleInterval", "Img")
        assert source.ancestors("ArrayImg") == {"ArrayImg", "Img", "RandomAccessibleInterval"}

    def test_cyclic_supertypes_terminate(self):
        source = StaticRegistrySource([], {"A": ["B"], "B": ["A"]})
        assert source.is_assignable("A", "B")
        assert not source.is_assignable("A", "C")

    def test_from_document(self):
        document = RegistryDocument(types={"ArrayImg": ["Img"]}, ops=[RegistryEntry(name="x")])
        source = StaticRegistrySource.from_document(document)
        assert len(source) == 1
        assert source.is_assignable("ArrayImg", "Img")


class TestJsonRegistrySource:
    """Tests for JsonRegistrySource."""

    def test_load(self, registry_file, entries):
        source = JsonRegistrySource(registry_file)
        assert source.entries() == entries
        assert source.is_assignable("ArrayImg", "Img")

    def test_bare_list(self, tmp_path):
        path = tmp_path / "ops.json"
        path.write_text(json.dumps([{"name": "gauss", "namespace": "filter"}]))
        source = JsonRegistrySource(path)
        assert [e.name for e in source.entries()] == ["gauss"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(RegistryLoadError, match="not found"):
            JsonRegistrySource(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(RegistryLoadError, match="not valid JSON"):
            JsonRegistrySource(path)

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"ops": [{"inputs": [{"name": "no type"}]}]}))
        with pytest.raises(RegistryLoadError, match="Invalid registry document"):
            JsonRegistrySource(path)
