# src/op_finder/main.py
"""Entry-point for the op-finder CLI"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

import typer
from chuk_term.ui import output

from op_finder.commands.browse import browse_command
from op_finder.commands.common import AppContext
from op_finder.commands.interactive import interactive_command
from op_finder.commands.search import search_command
from op_finder.config.defaults import DEFAULT_LOG_LEVEL
from op_finder.config.env_vars import EnvVar, get_env
from op_finder.config.logging import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Browse and fuzzy-search an op registry.")


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None, "--config", help="Configuration file path (JSON)"
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Set log level"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also log to this file"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Suppress most log output"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable verbose logging"),
) -> None:
    """op-finder - browse and fuzzy-search an op registry."""
    level = log_level or get_env(EnvVar.LOG_LEVEL) or DEFAULT_LOG_LEVEL
    try:
        setup_logging(
            level=level,
            quiet=quiet,
            verbose=verbose,
            log_file=log_file or get_env(EnvVar.LOG_FILE),
        )
    except ValueError as e:
        output.error(str(e))
        raise typer.Exit(code=2) from e

    ctx.obj = AppContext(config_file=config_file)


app.command("browse")(browse_command)
app.command("search")(search_command)
app.command("interactive")(interactive_command)


def main():
    """Main entry point."""
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    app()


if __name__ == "__main__":
    main()
