# op_finder/commands/search.py
"""``op-finder search`` - one fuzzy query against the registry."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from chuk_term.ui import output
from rich.console import Console
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from op_finder.commands.common import load_config, load_index, resolve_simple_mode
from op_finder.commands.formatting import results_json, results_table
from op_finder.config.models import ConfigOverride
from op_finder.finder.index import OpIndex
from op_finder.finder.models import FilterOutcome
from op_finder.finder.session import FinderSession
from op_finder.utils.preferences import get_preference_manager


async def run_search(
    index: OpIndex, query: str, simple: bool, show_progress: bool = True
) -> FilterOutcome | None:
    """Filter *index* with *query* through a session, drawing a progress bar."""
    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=Console(stderr=True),
        transient=True,
        disable=not show_progress,
    )
    with progress:
        bar = progress.add_task(f"Filtering '{query}'", total=100)
        async with FinderSession(
            index,
            simple=simple,
            on_progress=lambda percent: progress.update(bar, completed=percent),
        ) as session:
            return await session.search(query)


def search_command(
    ctx: typer.Context,
    registry: Path = typer.Argument(..., help="Registry snapshot (JSON)"),
    query: str = typer.Argument(..., help="Free-text query"),
    simple: Optional[bool] = typer.Option(
        None, "--simple/--advanced", help="Simplified user view or full developer view"
    ),
    keep: Optional[int] = typer.Option(
        None, "--keep", min=1, help="Number of distinct top scores to keep"
    ),
    scores: bool = typer.Option(False, "--scores", help="Show the score of each result"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Rank ops against QUERY and print the best matches."""
    config = load_config(ctx, ConfigOverride(keep=keep))
    index = load_index(registry, config)
    is_simple = resolve_simple_mode(simple)

    if not query:
        output.warning("Empty query - use 'browse' to see every op")
        raise typer.Exit(code=1)

    outcome = asyncio.run(run_search(index, query, is_simple, show_progress=not as_json))
    if outcome is None or outcome.is_cancelled:
        output.error(f"Search for '{query}' did not complete")
        raise typer.Exit(code=1)

    get_preference_manager().add_recent_query(query)

    if as_json:
        typer.echo(json.dumps(results_json(outcome), indent=2))
        return

    if not outcome.entries:
        output.warning(f"No ops match '{query}'")
        return

    output.print(results_table(outcome, with_score=scores))
    output.success(f"{len(outcome.entries)} result(s), best score {outcome.scores[0]}")
