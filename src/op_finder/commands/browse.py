# op_finder/commands/browse.py
"""``op-finder browse`` - print the op hierarchy."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from chuk_term.ui import output

from op_finder.commands.common import load_config, load_index, resolve_simple_mode
from op_finder.commands.formatting import build_rich_tree
from op_finder.config.enums import ViewMode
from op_finder.utils.preferences import get_preference_manager


def browse_command(
    ctx: typer.Context,
    registry: Optional[Path] = typer.Argument(
        None, help="Registry snapshot (JSON), defaults to the last one used"
    ),
    simple: Optional[bool] = typer.Option(
        None, "--simple/--advanced", help="Simplified user view or full developer view"
    ),
    depth: Optional[int] = typer.Option(
        None, "--depth", min=1, help="Only show this many levels below the root (remembered)"
    ),
    code: bool = typer.Option(False, "--code", help="Show the code snippet of each op"),
) -> None:
    """Show the namespace hierarchy of all ops."""
    config = load_config(ctx)
    index = load_index(registry, config)
    mode = ViewMode.from_flag(resolve_simple_mode(simple))

    preferences = get_preference_manager()
    if depth is None:
        depth = preferences.get_tree_depth()
    else:
        preferences.set_tree_depth(depth)

    root = index.tree(mode)
    if not root.children:
        output.warning(f"No ops in the {mode.value} view")
        if mode.is_simple:
            output.hint("Try --advanced to see every op")
        return

    output.rule(f"{mode.value.capitalize()} view")
    output.print(build_rich_tree(root, max_depth=depth, show_code=code))
    output.info(f"{len(index.descriptors(mode))} ops")
