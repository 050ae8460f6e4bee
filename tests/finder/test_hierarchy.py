# tests/finder/test_hierarchy.py
"""Tests for the namespace hierarchy builder and tree nodes."""

from op_finder.finder.hierarchy import HierarchyBuilder, prune_empty_nodes, resolve_name
from op_finder.finder.models import TreeNode


def make_root():
    return TreeNode(label="ops", invocation="# @OpService ops", owner_type="OpService")


def labels(node):
    return [child.label for child in node.children]


class TestResolveName:
    """Tests for resolve_name."""

    def test_prefers_name(self):
        assert resolve_name("gauss", "fallback") == "gauss"

    def test_falls_back_on_blank(self):
        assert resolve_name("  ", "fallback") == "fallback"
        assert resolve_name(None, "fallback") == "fallback"

    def test_both_empty(self):
        assert resolve_name(None, "") == ""
        assert resolve_name("", None) == ""

    def test_trims(self):
        assert resolve_name(" gauss ", None) == "gauss"


class TestHierarchyBuilder:
    """Tests for HierarchyBuilder."""

    def test_namespace_nodes_created_once(self, make_descriptor):
        """Entries in one namespace share its node."""
        builder = HierarchyBuilder(make_root())
        builder.insert("filter.gauss", make_descriptor("gauss a"))
        builder.insert("filter.gauss", make_descriptor("gauss b"))
        builder.insert("filter.sigma", make_descriptor("sigma"))

        root = builder.build()
        assert labels(root) == ["filter"]
        assert labels(root.find("filter")) == ["gauss", "sigma"]
        assert labels(root.find("filter", "gauss")) == ["gauss a", "gauss b"]

    def test_namespace_lookup_is_case_insensitive(self, make_descriptor):
        builder = HierarchyBuilder(make_root())
        builder.insert("Math.add", make_descriptor("a"))
        builder.insert("math.add", make_descriptor("b"))
        assert labels(builder.build()) == ["Math"]

    def test_siblings_sorted(self, make_descriptor):
        """Children are ordered by label regardless of insertion order."""
        builder = HierarchyBuilder(make_root())
        for namespace in ["math", "filter", "(global)", "image"]:
            builder.insert(f"{namespace}.op", make_descriptor(namespace))
        assert labels(builder.build()) == ["(global)", "filter", "image", "math"]

    def test_empty_path_uses_no_namespace(self, make_descriptor):
        builder = HierarchyBuilder(make_root(), no_namespace="(global)")
        builder.insert("", make_descriptor("eval"))
        assert labels(builder.build()) == ["(global)"]

    def test_sequence_path(self, make_descriptor):
        builder = HierarchyBuilder(make_root())
        leaf = builder.insert(["a", "b"], make_descriptor("x"))
        root = builder.build()
        assert root.find("a", "b", "x") is leaf

    def test_leaf_carries_descriptor(self, make_descriptor):
        descriptor = make_descriptor("gauss", invocation='ops.run("filter.gauss")', owner_type="G")
        leaf = HierarchyBuilder(make_root()).insert("filter.gauss", descriptor)
        assert leaf.label == "gauss"
        assert leaf.invocation == 'ops.run("filter.gauss")'
        assert leaf.owner_type == "G"
        assert leaf.descriptor is descriptor
        assert leaf.is_entry and leaf.is_leaf


class TestPruning:
    """Tests for prune_empty_nodes."""

    def test_removes_empty_namespaces(self, make_descriptor):
        root = make_root()
        builder = HierarchyBuilder(root)
        builder.namespace_node("empty.deeper")
        builder.insert("math.add", make_descriptor("add"))

        builder.build()

        assert labels(root) == ["math"]

    def test_no_empty_namespace_survives(self, make_descriptor):
        """After pruning, every node is an entry or has children."""
        root = make_root()
        builder = HierarchyBuilder(root)
        builder.namespace_node("a.b.c")
        builder.namespace_node("a.x")
        builder.insert("a.y", make_descriptor("y"))
        builder.build()

        for node in root.walk():
            assert node.is_entry or node.children
        assert labels(root.find("a")) == ["y"]

    def test_entries_never_pruned(self, make_descriptor):
        root = make_root()
        leaf = TreeNode.from_descriptor(make_descriptor("a"))
        root.add(leaf)
        assert prune_empty_nodes(root) is False
        assert root.children == [leaf]

    def test_empty_namespace_node_reports_removal(self):
        assert prune_empty_nodes(TreeNode(label="ns")) is True


class TestTreeNode:
    """Tests for TreeNode helpers."""

    def test_find_missing(self):
        assert make_root().find("nope") is None

    def test_structural_equality(self, make_descriptor):
        """Trees compare by content, not identity."""
        first, second = make_root(), make_root()
        first.add(TreeNode.from_descriptor(make_descriptor("a")))
        second.add(TreeNode.from_descriptor(make_descriptor("a")))
        assert first == second

    def test_leaves(self, make_descriptor):
        builder = HierarchyBuilder(make_root())
        builder.insert("x.y", make_descriptor("b"))
        builder.insert("x", make_descriptor("a"))
        root = builder.build()
        assert sorted(node.label for node in root.leaves()) == ["a", "b"]
