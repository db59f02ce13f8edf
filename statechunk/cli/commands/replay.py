"""
Replay command: apply a JSON-lines action log to a structure's default state.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from ...compiler import compile_structure
from ...core.batch import action_from_dict, flatten_actions
from ...core.errors import ConfigurationError
from ...core.reducer import combine_reducers
from ...replay import replay as replay_actions
from .._loader import default_chunk_name, load_structure

console = Console()


def read_actions(path: Path):
    """Parse one action (plain or combined) per non-empty line."""
    actions = []
    with open(path, "r") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                actions.append(action_from_dict(json.loads(line)))
            except ValueError as e:
                raise ValueError(f"{path}:{lineno}: {e}") from e
    return actions


def replay_command(
    target: str = typer.Argument(..., help="Structure to compile, as package.module:ATTRIBUTE"),
    actions_path: Path = typer.Option(..., "--actions", "-a", help="Path to JSON-lines action log"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Chunk name (default: attribute name)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay an action log and show the resulting state.

    Examples:
        statechunk replay myapp.state:SETTINGS --actions actions.jsonl
        statechunk replay myapp.state:SETTINGS -a actions.jsonl --json
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

    try:
        actions = read_actions(actions_path)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Action log not found", "path": str(actions_path)}))
        else:
            console.print(f"[red]✗ Action log not found: {actions_path}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        if json_output:
            print(json.dumps({"error": str(e), "path": str(actions_path)}))
        else:
            console.print(f"[red]✗ Malformed action log: {e}[/red]")
        raise typer.Exit(1)

    result = replay_actions(combine_reducers({chunk_name: root.reducer}), actions)
    action_counts = Counter(a.type for action in actions for a in flatten_actions(action))

    if json_output:
        output = {
            "actions_replayed": result.applied,
            "action_counts": dict(action_counts),
            "state": result.state,
        }
        print(json.dumps(output, indent=2, sort_keys=True, default=repr))
        raise typer.Exit(0)

    console.print(f"[green]✓ Replayed {result.applied} actions successfully[/green]")

    table = Table(title="Action Counts")
    table.add_column("Action Type", style="green")
    table.add_column("Count", style="cyan", justify="right")
    for action_type in sorted(action_counts):
        table.add_row(action_type, str(action_counts[action_type]))
    console.print(table)

    console.print("\n[bold]Final State:[/bold]")
    console.print(Syntax(json.dumps(result.state, indent=2, default=repr), "json", theme="monokai"))
