"""Search and load commands for CLI."""

from __future__ import annotations

from pathlib import Path

import typer

from configscout.cli.formatting import print_result
from configscout.cli.main import app, build_explorer, report_error
from configscout.core.exceptions import ConfigscoutError


@app.command()
def search(
    module_name: str = typer.Argument(..., help="Tool name, e.g. 'mytool'."),
    search_from: Path | None = typer.Option(
        None,
        "--from",
        "-f",
        help="Directory to start searching from. Defaults to current directory.",
    ),
    stop_dir: Path | None = typer.Option(
        None,
        "--stop-dir",
        "-s",
        help="Last directory to search. Defaults to your home directory.",
    ),
    no_ignore_empty: bool = typer.Option(
        False,
        "--no-ignore-empty",
        help="Stop at the first matching file even if it is empty.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Search upward for MODULE_NAME's configuration."""
    explorer = build_explorer(
        module_name, stop_dir=stop_dir, ignore_empty=not no_ignore_empty
    )
    try:
        result = explorer.search(search_from)
    except ConfigscoutError as e:
        report_error(e)
        raise typer.Exit(1) from None

    print_result(result, as_json=as_json)
    if result is None:
        raise typer.Exit(1)


@app.command()
def load(
    module_name: str = typer.Argument(..., help="Tool name, e.g. 'mytool'."),
    filepath: Path = typer.Argument(..., help="Config file to load."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Load a single configuration file for MODULE_NAME."""
    explorer = build_explorer(module_name)
    try:
        result = explorer.load(filepath)
    except ConfigscoutError as e:
        report_error(e)
        raise typer.Exit(1) from None

    print_result(result, as_json=as_json)
    if result is None:
        raise typer.Exit(1)
