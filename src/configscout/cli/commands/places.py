"""Places command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from configscout.cli.main import app, build_explorer


@app.command()
def places(
    module_name: str = typer.Argument(..., help="Tool name, e.g. 'mytool'."),
) -> None:
    """List the files checked in each directory, in search order."""
    explorer = build_explorer(module_name)

    table = Table()
    table.add_column("#", justify="right")
    table.add_column("Search place")
    for i, place in enumerate(explorer.config.search_places, 1):
        table.add_row(str(i), place)

    console = Console(force_terminal=True)
    console.print(table)
    if explorer.config.meta_config_filepath is not None:
        typer.echo(f"Overridden by {explorer.config.meta_config_filepath}")
