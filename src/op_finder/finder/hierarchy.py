# op_finder/finder/hierarchy.py
"""Namespace hierarchy: namespace nodes created on demand, empty ones pruned."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from op_finder.config.defaults import NO_NAMESPACE
from op_finder.finder.models import EntryDescriptor, TreeNode

logger = logging.getLogger(__name__)


def resolve_name(name: str | None, fallback: str | None) -> str:
    """Use *name* if non-empty, else *fallback*; trimmed, never None."""
    if name is None or not name.strip():
        name = fallback
    return "" if name is None else name.strip()


def prune_empty_nodes(node: TreeNode) -> bool:
    """Recursively drop namespace nodes that lead to no entries.

    Returns:
        True if *node* itself should be removed from its parent.
    """
    node.children[:] = [child for child in node.children if not prune_empty_nodes(child)]
    # An invocation marks a real entry, which is never pruned
    return not node.is_entry and not node.children


class HierarchyBuilder:
    """Builds a namespace/op tree under a fixed root.

    Namespace nodes are looked up by their lower-cased dotted prefix, so
    ``Math.add`` and ``math.add`` share nodes.
    """

    def __init__(self, root: TreeNode, no_namespace: str = NO_NAMESPACE) -> None:
        self.root = root
        self.no_namespace = no_namespace
        self._namespaces: dict[str, TreeNode] = {}

    def namespace_node(self, namespace_path: str | Sequence[str]) -> TreeNode:
        """Ensure nodes for every prefix of *namespace_path* exist.

        Returns:
            The node of the deepest namespace.
        """
        if isinstance(namespace_path, str):
            segments = namespace_path.split(".")
        else:
            segments = list(namespace_path)
        if not any(segment.strip() for segment in segments):
            segments = [self.no_namespace]

        parent = self.root
        prefix = ""
        for segment in segments:
            prefix = f"{prefix}.{segment}" if prefix else segment
            key = prefix.lower()
            node = self._namespaces.get(key)
            if node is None:
                node = TreeNode(label=segment)
                self._namespaces[key] = node
                parent.add(node)
            parent = node
        return parent

    def insert(
        self, namespace_path: str | Sequence[str], descriptor: EntryDescriptor
    ) -> TreeNode:
        """Add *descriptor* as a leaf below *namespace_path*; returns the leaf."""
        leaf = TreeNode.from_descriptor(descriptor)
        self.namespace_node(namespace_path).add(leaf)
        return leaf

    def build(self) -> TreeNode:
        """Prune empty namespaces and return the root."""
        before = sum(1 for _ in self.root.walk())
        prune_empty_nodes(self.root)
        after = sum(1 for _ in self.root.walk())
        if before != after:
            logger.debug(f"Pruned {before - after} empty namespace node(s)")
        return self.root
