"""
Root Typer application for the implindex CLI.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError
from typer import Typer

from implindex.cli.utils import print_error

app = Typer(
    name="implindex",
    help="implindex: merge implementor fragments into a cross-reference index.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from implindex import __version__

        typer.echo(f"implindex {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """implindex CLI: index, emit and inspect implementor fragments."""
    from implindex.core.logging import configure_logging
    from implindex.core.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        print_error("invalid configuration", details=str(e))
        raise typer.Exit(code=1) from e

    configure_logging(level=settings.log_level, json_format=settings.log_format == "json")


# ── Sub-command registration ─────────────────────────────────────────────

from implindex.cli.config import app as config_app  # noqa: E402
from implindex.cli.index import emit_fragment, index_fragments  # noqa: E402

app.command("index")(index_fragments)
app.command("emit")(emit_fragment)
app.add_typer(config_app, name="config", help="Configuration inspection.")


if __name__ == "__main__":
    app()
