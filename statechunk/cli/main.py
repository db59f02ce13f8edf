#!/usr/bin/env python3
"""
statechunk CLI

Main entrypoint for the statechunk command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..logging_config import setup_logging
from .commands import inspect, replay

app = typer.Typer(
    name="statechunk",
    help="Compile state structure definitions into reducers, actions and selectors",
    add_completion=False,
)

console = Console()

app.command("inspect")(inspect.inspect_command)
app.command("replay")(replay.replay_command)


@app.callback()
def configure(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="STATECHUNK_LOG_LEVEL",
        help="DEBUG, INFO, WARNING or ERROR",
    ),
    log_format: str = typer.Option(
        "json",
        "--log-format",
        envvar="STATECHUNK_LOG_FORMAT",
        help="json or text",
    ),
):
    """Configure logging before any command runs."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    table = Table(show_header=False, box=None)
    table.add_row("[bold]statechunk[/bold]", f"v{__version__}")
    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
