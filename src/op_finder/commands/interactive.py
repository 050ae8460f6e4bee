# op_finder/commands/interactive.py
"""``op-finder interactive`` - refine queries line by line."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from chuk_term.ui import output

from op_finder.commands.common import load_config, open_registry, resolve_simple_mode
from op_finder.commands.formatting import build_rich_tree, results_table
from op_finder.config.models import FinderConfig
from op_finder.finder.index import OpIndex
from op_finder.finder.session import FinderSession
from op_finder.registry.source import RegistrySource
from op_finder.utils.preferences import get_preference_manager

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {":q", ":quit", ":exit"}
HELP_TEXT = (
    "Type a query to filter, an empty line to show the full tree.\n"
    "  :mode      toggle simple/advanced view\n"
    "  :simple    switch to the simplified view\n"
    "  :advanced  switch to the full view\n"
    "  :quit      leave"
)


class InteractiveShell:
    """Reads queries from stdin and shows each installed tree."""

    def __init__(self, index: OpIndex, simple: bool, depth: Optional[int] = None) -> None:
        self.index = index
        self.depth = depth
        self.session = FinderSession(index, simple=simple)

    def show(self) -> None:
        session = self.session
        outcome = session.last_outcome
        if outcome is not None and outcome.query == session.query:
            output.print(results_table(outcome))
        else:
            output.print(build_rich_tree(session.current_tree, max_depth=self.depth))

    async def handle(self, line: str) -> bool:
        """Process one input line; False means leave the shell."""
        command = line.strip()
        if command in QUIT_COMMANDS:
            return False
        if command in (":help", ":h", "?"):
            output.print(HELP_TEXT)
            return True
        if command in (":mode", ":simple", ":advanced"):
            if command == ":mode":
                simple = not self.session.is_simple
            else:
                simple = command == ":simple"
            self.session.set_mode(simple)
            get_preference_manager().set_simple_mode(simple)
            output.info(f"{self.session.mode.value.capitalize()} view")
        elif command.startswith(":"):
            output.error(f"Unknown command: {command}")
            output.hint("Type :help for the list of commands")
            return True
        else:
            self.session.submit(command)
            get_preference_manager().add_recent_query(command)

        await self.session.wait()
        self.show()
        return True

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        output.hint(HELP_TEXT)
        try:
            while True:
                typer.echo("query> ", nl=False)
                line = await loop.run_in_executor(None, sys.stdin.readline)
                if not line:
                    break
                if not await self.handle(line.rstrip("\r\n")):
                    break
        finally:
            self.session.close()


async def run_interactive(
    source: RegistrySource, config: FinderConfig, simple: bool, depth: Optional[int]
) -> None:
    """Index *source* off the event loop, then run the shell."""
    index = await OpIndex.build_async(source, config)
    await InteractiveShell(index, simple=simple, depth=depth).run()


def interactive_command(
    ctx: typer.Context,
    registry: Optional[Path] = typer.Argument(
        None, help="Registry snapshot (JSON), defaults to the last one used"
    ),
    simple: Optional[bool] = typer.Option(
        None, "--simple/--advanced", help="Simplified user view or full developer view"
    ),
) -> None:
    """Filter the op hierarchy interactively."""
    config = load_config(ctx)
    source = open_registry(registry)
    depth = get_preference_manager().get_tree_depth()

    try:
        asyncio.run(run_interactive(source, config, resolve_simple_mode(simple), depth))
    except KeyboardInterrupt:
        logger.debug("Interactive mode interrupted by user")
    output.info("Bye")
