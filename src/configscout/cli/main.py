"""CLI for configscout."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from configscout.core.exceptions import ConfigscoutError


if TYPE_CHECKING:
    from configscout import ExplorerSync


app = typer.Typer(
    name="configscout",
    help="Find and load a tool's configuration file.",
    no_args_is_help=True,
)


@app.callback()
def configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each directory and file the search visits.",
    ),
) -> None:
    """Find and load a tool's configuration file."""
    if verbose:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.WARNING,
            format="%(message)s",
            handlers=[
                RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
            ],
            force=True,
        )
        logging.getLogger("configscout").setLevel(logging.DEBUG)


def build_explorer(
    module_name: str,
    *,
    stop_dir: Path | None = None,
    ignore_empty: bool = True,
) -> ExplorerSync:
    """Create the explorer used by CLI commands.

    Raises:
        typer.Exit: If the options are rejected.
    """
    from configscout import configscout_sync

    try:
        return configscout_sync(
            module_name,
            stop_dir=stop_dir,
            ignore_empty_search_places=ignore_empty,
        )
    except ConfigscoutError as e:
        report_error(e)
        raise typer.Exit(1) from None


def report_error(error: ConfigscoutError) -> None:
    """Print an error and its recovery hint to stderr."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)


def main() -> None:
    """Entry point for the CLI."""
    app()
