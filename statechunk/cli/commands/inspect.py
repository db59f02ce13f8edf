"""
Inspect command: show what a structure compiles to.
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ...compiler import compile_structure
from ...core.compiled import iter_boundaries, iter_leaves
from ...core.errors import ConfigurationError
from ...core.reducer import combine_reducers
from ...replay import replay as replay_actions
from .._loader import default_chunk_name, load_structure

console = Console()


def inspect_command(
    target: str = typer.Argument(..., help="Structure to compile, as package.module:ATTRIBUTE"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Chunk name (default: attribute name)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show leaves, action types, reducer boundaries and default state.

    Examples:
        statechunk inspect myapp.state:SETTINGS
        statechunk inspect myapp.state:SETTINGS --name settings --json
    """
    try:
        structure = load_structure(target)
        chunk_name = name or default_chunk_name(target)
        root = compile_structure(chunk_name, structure)
    except (ImportError, AttributeError, ConfigurationError) as e:
        if json_output:
            print(json.dumps({"error": str(e), "target": target}))
        else:
            console.print(f"[red]✗ Cannot compile {target}: {e}[/red]")
        raise typer.Exit(2)

    leaves = list(iter_leaves(root))
    boundaries = [node.location_string for node in iter_boundaries(root)]
    default_state = replay_actions(combine_reducers({chunk_name: root.reducer}), []).state

    if json_output:
        output = {
            "name": chunk_name,
            "nested": not root.is_leaf,
            "boundaries": boundaries,
            "leaves": {leaf.location_string: leaf.action_types for leaf in leaves},
            "default_state": default_state,
        }
        print(json.dumps(output, indent=2, sort_keys=True, default=repr))
        raise typer.Exit(0)

    table = Table(title=f"Store chunk: {chunk_name}")
    table.add_column("Location", style="green")
    table.add_column("Operation", style="cyan")
    table.add_column("Action type", style="yellow")
    for leaf in leaves:
        for operation, action_type in leaf.action_types.items():
            table.add_row(leaf.location_string, operation, action_type)
    console.print(table)

    if boundaries:
        console.print("\n[bold]Reducer boundaries (reset-all scopes):[/bold]")
        for location in boundaries:
            console.print(f"  {location}")

    console.print("\n[bold]Default state:[/bold]")
    console.print(Syntax(json.dumps(default_state, indent=2, default=repr), "json", theme="monokai"))
