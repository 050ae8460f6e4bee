"""Common test fixtures for op-finder tests."""

import json
import logging

import pytest

from op_finder.config.models import FinderConfig
from op_finder.finder.index import OpIndex
from op_finder.finder.models import EntryDescriptor
from op_finder.registry.models import OpParameter, RegistryEntry
from op_finder.registry.source import StaticRegistrySource

SUPERTYPES = {
    "ArrayImg": ["Img"],
    "PlanarImg": ["Img"],
    "Img": ["RandomAccessibleInterval", "IterableInterval"],
    "RandomAccessibleInterval": [],
    "IterableInterval": [],
    "RealType": [],
}


@pytest.fixture
def make_descriptor():
    """Factory for descriptors with sensible defaults."""

    def factory(name, key=None, invocation=None, owner_type=""):
        return EntryDescriptor(
            display_name=name,
            invocation=invocation or f'ops.run("{name}")',
            owner_type=owner_type,
            match_key=name if key is None else key,
        )

    return factory


def sample_entries():
    """A small registry covering every indexing path."""
    return [
        # Not simple: RandomAccessibleInterval is a supertype of Img
        RegistryEntry(
            name="gauss",
            namespace="filter",
            signature=(
                "(ArrayImg out) = filter.gauss(RandomAccessibleInterval in, "
                "double[] sigmas, OutOfBoundsFactory outOfBounds?)"
            ),
            owner_type="net.imagej.ops.filter.gauss.DefaultGaussRAI",
            inputs=[
                OpParameter(type_name="RandomAccessibleInterval", name="in"),
                OpParameter(type_name="double[]", name="sigmas"),
                OpParameter(type_name="OutOfBoundsFactory", name="outOfBounds", required=False),
            ],
        ),
        RegistryEntry(
            name="gauss",
            namespace="filter",
            signature="(ArrayImg out) = filter.gauss(ArrayImg in, double sigma)",
            owner_type="net.imagej.ops.filter.gauss.GaussRAISingleSigma",
            inputs=[
                OpParameter(type_name="ArrayImg", name="in"),
                OpParameter(type_name="double", name="sigma"),
            ],
        ),
        RegistryEntry(
            name="add",
            namespace="math",
            signature="(RealType out) = math.add(RealType in1, RealType in2)",
            owner_type="net.imagej.ops.math.RealMath.Add",
            inputs=[
                OpParameter(type_name="RealType", name="in1"),
                OpParameter(type_name="RealType", name="in2"),
            ],
        ),
        RegistryEntry(
            name="eval",
            signature="(Object out) = eval(String script)",
            owner_type="net.imagej.ops.eval.DefaultEval",
            inputs=[OpParameter(type_name="String", name="script")],
        ),
        RegistryEntry(
            name="  ",
            fallback_name="identity",
            namespace="image",
            signature="(Img out) = image.identity(Img in)",
            owner_type="net.imagej.ops.identity.DefaultIdentity",
            invocation='ops.image().identity(in)',
            inputs=[OpParameter(type_name="Img", name="in")],
        ),
        # No usable name at all: skipped
        RegistryEntry(
            name=None,
            fallback_name="",
            namespace="broken",
            signature="(Img out) = broken(Img in)",
            owner_type="net.imagej.ops.Broken",
            inputs=[OpParameter(type_name="Img", name="in")],
        ),
    ]


@pytest.fixture
def entries():
    return sample_entries()


@pytest.fixture
def source(entries):
    return StaticRegistrySource(entries, SUPERTYPES)


@pytest.fixture
def config():
    return FinderConfig()


@pytest.fixture
def op_index(source, config):
    return OpIndex.build(source, config)


@pytest.fixture
def registry_file(tmp_path, entries):
    """The sample registry written as a JSON document."""
    path = tmp_path / "registry.json"
    document = {
        "types": SUPERTYPES,
        "ops": [entry.model_dump() for entry in entries],
    }
    path.write_text(json.dumps(document))
    return path


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep preferences and env overrides away from the real user setup."""
    import op_finder.utils.preferences

    monkeypatch.setattr(op_finder.utils.preferences, "_preference_manager", None)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for var in (
        "OP_FINDER_KEEP",
        "OP_FINDER_PROGRESS_STEP",
        "OP_FINDER_MAX_WORKERS",
        "OP_FINDER_SIMPLE_MODE",
        "OP_FINDER_SIMPLE_TYPES",
        "OP_FINDER_LOG_LEVEL",
        "OP_FINDER_LOG_FILE",
        "OP_FINDER_CONFIG",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by setup_logging (directly or via the CLI)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
