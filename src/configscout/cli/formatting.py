"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text


if TYPE_CHECKING:
    from configscout import SearchResult


def result_to_json(result: SearchResult | None) -> str:
    """Serialize a result for --json output.

    Values JSON cannot represent (e.g. objects from a Python config) are
    rendered with str().
    """
    if result is None:
        return json.dumps(None)
    payload = {
        "filepath": str(result.filepath),
        "config": result.config,
        "isEmpty": result.is_empty,
    }
    return json.dumps(payload, indent=2, default=str)


def _format_config(result: SearchResult) -> Text | Pretty:
    if result.is_empty:
        return Text("(empty)", style="yellow")
    return Pretty(result.config)


def print_result(result: SearchResult | None, *, as_json: bool = False) -> None:
    """Print a result as a Rich table, or as JSON."""
    if as_json:
        # Plain print so output stays machine-readable
        print(result_to_json(result))
        return

    console = Console(force_terminal=True)
    if result is None:
        console.print(Text("No configuration found.", style="red"))
        return

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("File", str(result.filepath))
    table.add_row("Config", _format_config(result))
    console.print(table)
