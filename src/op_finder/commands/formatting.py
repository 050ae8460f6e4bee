# op_finder/commands/formatting.py
"""Rendering helpers: op trees as rich trees, filter results as tables."""

from __future__ import annotations

from typing import Any

from chuk_term.ui import format_table
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from op_finder.config.defaults import COLUMN_NAMES
from op_finder.finder.models import FilterOutcome, TreeNode

SIGNATURE_COLUMN, CODE_COLUMN, CLASS_COLUMN = COLUMN_NAMES


def _node_label(node: TreeNode, show_code: bool) -> str:
    if node.is_leaf and node.is_entry:
        label = f"[bold]{escape(node.label)}[/bold]"
        if show_code:
            label += f"  [dim]{escape(node.invocation)}[/dim]"
        return label
    return f"[cyan]{escape(node.label)}[/cyan]"


def build_rich_tree(
    root: TreeNode, max_depth: int | None = None, show_code: bool = False
) -> Tree:
    """Render *root* as a rich Tree, cutting off below *max_depth* levels."""
    tree = Tree(_node_label(root, show_code))

    def add_children(parent: Tree, node: TreeNode, depth: int) -> None:
        if max_depth is not None and depth >= max_depth:
            if node.children:
                parent.add(f"[dim]… {len(node.children)} more[/dim]")
            return
        for child in node.children:
            branch = parent.add(_node_label(child, show_code))
            add_children(branch, child, depth + 1)

    add_children(tree, root, 0)
    return tree


def entry_row(node: TreeNode) -> dict[str, str]:
    """One table row for an entry node."""
    return {
        SIGNATURE_COLUMN: node.label,
        CODE_COLUMN: node.invocation,
        CLASS_COLUMN: node.owner_type,
    }


def results_rows(outcome: FilterOutcome, with_score: bool = False) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for rank, scored in enumerate(outcome.entries, 1):
        row: dict[str, Any] = {"#": str(rank)}
        row.update(entry_row(TreeNode.from_descriptor(scored.descriptor)))
        if with_score:
            row["Score"] = str(scored.score)
        rows.append(row)
    return rows


def results_table(outcome: FilterOutcome, with_score: bool = False) -> Table:
    """Ranked results of a filter run as a table."""
    columns = ["#", *COLUMN_NAMES]
    if with_score:
        columns.append("Score")
    return format_table(
        data=results_rows(outcome, with_score),
        title=f"Results for '{outcome.query}'",
        columns=columns,
    )


def results_json(outcome: FilterOutcome) -> list[dict[str, Any]]:
    """Plain data for ``--json`` output."""
    return [
        {
            "signature": scored.descriptor.display_name,
            "code": scored.descriptor.invocation,
            "owner_type": scored.descriptor.owner_type,
            "score": scored.score,
        }
        for scored in outcome.entries
    ]
