# op_finder/finder/models.py
"""Data models for the op index: entry descriptors, tree nodes, outcomes."""

from __future__ import annotations

from bisect import insort
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


# ──────────────────────────────────────────────────────────────────────────────
# Entry descriptor
# ──────────────────────────────────────────────────────────────────────────────
class EntryDescriptor(BaseModel):
    """Immutable snapshot of one registry entry.

    Ordered by ``(display_name, owner_type)``; the same order is used for
    sibling nodes and to break ties between equal filter scores.
    """

    display_name: str = Field(min_length=1)
    invocation: str = ""
    owner_type: str = ""
    match_key: str = ""

    model_config = {"frozen": True}

    def sort_key(self) -> tuple[str, str]:
        return (self.display_name, self.owner_type)

    def __lt__(self, other: EntryDescriptor) -> bool:
        return self.sort_key() < other.sort_key()


# ──────────────────────────────────────────────────────────────────────────────
# Tree node
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(eq=True)
class TreeNode:
    """One node of a browsable op tree.

    Leaves carry an invocation snippet; namespace nodes carry none and must
    have at least one child once the tree is pruned.
    """

    label: str
    invocation: str = ""
    owner_type: str = ""
    children: list[TreeNode] = field(default_factory=list)
    descriptor: EntryDescriptor | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_descriptor(cls, descriptor: EntryDescriptor) -> TreeNode:
        """Create a leaf node for *descriptor*."""
        return cls(
            label=descriptor.display_name,
            invocation=descriptor.invocation,
            owner_type=descriptor.owner_type,
            descriptor=descriptor,
        )

    @property
    def is_entry(self) -> bool:
        """A node with invocation text is a concrete op, never a namespace."""
        return bool(self.invocation)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def sort_key(self) -> tuple[str, str]:
        return (self.label, self.owner_type)

    def add(self, child: TreeNode) -> None:
        """Insert *child* keeping siblings ordered by (label, owner type)."""
        insort(self.children, child, key=TreeNode.sort_key)

    def append(self, child: TreeNode) -> None:
        """Append *child* as-is (ranked results keep the caller's order)."""
        self.children.append(child)

    def walk(self) -> Iterator[TreeNode]:
        """Pre-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> Iterator[TreeNode]:
        """All entry nodes below (and including) this node."""
        return (node for node in self.walk() if node.is_entry and node.is_leaf)

    def find(self, *labels: str) -> TreeNode | None:
        """Follow child labels from this node; None if any step is missing."""
        node: TreeNode | None = self
        for label in labels:
            if node is None:
                return None
            node = next((c for c in node.children if c.label == label), None)
        return node


# ──────────────────────────────────────────────────────────────────────────────
# Filter outcome
# ──────────────────────────────────────────────────────────────────────────────
class FilterStatus(str, Enum):
    """Terminal outcome of one filter run."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ScoredEntry(BaseModel):
    """A descriptor together with the score it earned."""

    descriptor: EntryDescriptor
    score: int

    model_config = {"frozen": True}


class FilterOutcome(BaseModel):
    """Result of a filter run - either completed with results or cancelled."""

    query: str
    status: FilterStatus
    entries: list[ScoredEntry] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def cancelled(cls, query: str) -> FilterOutcome:
        return cls(query=query, status=FilterStatus.CANCELLED)

    @property
    def is_cancelled(self) -> bool:
        return self.status is FilterStatus.CANCELLED

    @property
    def results(self) -> list[EntryDescriptor]:
        """Descriptors in emission order (score descending, then entry order)."""
        return [entry.descriptor for entry in self.entries]

    @property
    def scores(self) -> list[int]:
        return [entry.score for entry in self.entries]
