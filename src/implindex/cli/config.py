"""
CLI: ``implindex config``: settings inspection.
"""

from __future__ import annotations

import json

import typer
from rich.table import Table

from implindex.cli.utils import console

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json, env"),
) -> None:
    """Show current configuration."""
    from implindex.core.settings import get_settings

    settings = get_settings()

    if format == "json":
        console.print_json(settings.model_dump_json())
        return

    if format == "env":
        for key, value in sorted(settings.model_dump(mode="json").items()):
            if isinstance(value, list | dict):
                value = json.dumps(value)
            typer.echo(f"IMPLINDEX_{key.upper()}={value}")
        return

    table = Table(title="Settings")
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in sorted(settings.model_dump().items()):
        table.add_row(key, str(value))
    console.print(table)
