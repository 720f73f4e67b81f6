"""
CLI utility helpers: consoles and merged-index formatting.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

from implindex.registry.models import MergedIndex

console = Console()
err_console = Console(stderr=True)


def snapshot_to_dict(snapshot: Mapping[str, MergedIndex]) -> dict[str, dict[str, list[str]]]:
    """Convert a site snapshot into plain JSON-ready dicts."""
    return {trait: {key: list(entries) for key, entries in index.items()} for trait, index in snapshot.items()}


def snapshot_table(snapshot: Mapping[str, MergedIndex], title: str = "Implementors") -> Table:
    """One row per (trait, bucket) with its entry count."""
    table = Table(title=title)
    table.add_column("Trait", style="cyan")
    table.add_column("Bucket")
    table.add_column("Entries", justify="right")

    for trait, index in snapshot.items():
        if not index:
            table.add_row(trait, "-", "0")
            continue
        for key in sorted(index):
            table.add_row(trait, key, str(len(index[key])))
    return table


def print_error(message: str, **details: Any) -> None:
    err_console.print(f"[bold red]Error[/bold red]: {message}")
    for key, value in details.items():
        err_console.print(f"  {key}: {value}")
