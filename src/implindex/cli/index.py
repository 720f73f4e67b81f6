"""
CLI: ``implindex index`` and ``implindex emit``.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from implindex.cli.utils import console, err_console, print_error, snapshot_table, snapshot_to_dict
from implindex.core.errors import ConfigError, FragmentParseError
from implindex.core.settings import get_settings
from implindex.fragments.codec import render_fragment, write_fragment_file
from implindex.fragments.loader import FragmentLoader
from implindex.registry.models import Contribution
from implindex.registry.site import ImplementorSite


def index_fragments(
    root: Path | None = typer.Argument(None, help="Root of the implementors/ tree (default: IMPLINDEX_FRAGMENTS_DIR)"),
    trait: str | None = typer.Option(None, "--trait", "-t", help="Only show this trait path"),
    as_json: bool = typer.Option(False, "--json", help="Output merged indices as JSON"),
    strict: bool | None = typer.Option(None, "--strict/--lenient", help="Fail on unparsable fragments"),
) -> None:
    """Load every fragment under ROOT and show the merged implementor index."""
    settings = get_settings()
    loader = FragmentLoader(
        root or settings.fragments_dir,
        suffixes=settings.fragment_suffixes,
        strict=settings.strict_fragments if strict is None else strict,
    )
    site = ImplementorSite()

    try:
        report = loader.load_into(site)
    except (ConfigError, FragmentParseError) as e:
        print_error(e.message, **e.context.to_dict())
        raise typer.Exit(code=1) from e

    if not report.loaded:
        print_error(f"no fragments found under {loader.root}")
        raise typer.Exit(code=1)

    site.initialize_all()
    snapshot = dict(site.snapshot())

    if trait is not None:
        if trait not in snapshot:
            print_error(f"unknown trait: {trait}", available=", ".join(snapshot) or "none")
            raise typer.Exit(code=1)
        snapshot = {trait: snapshot[trait]}

    if as_json:
        console.print_json(json.dumps(snapshot_to_dict(snapshot)))
        return

    console.print(snapshot_table(snapshot))
    for path, error in report.skipped:
        err_console.print(f"[yellow]skipped[/yellow] {path}: {error.message}")


def emit_fragment(
    bucket_key: str = typer.Argument(..., help="Bucket key, e.g. the crate name"),
    entries: list[str] = typer.Argument(..., help="Implementor entries (pre-rendered markup)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
    json_format: bool = typer.Option(False, "--json", help="Emit a JSON fragment"),
) -> None:
    """Write a fragment contributing ENTRIES to BUCKET_KEY."""
    contribution = Contribution.single(bucket_key, list(entries))
    fmt = "json" if json_format else None

    if output is None:
        typer.echo(render_fragment(contribution, format=fmt or "js"), nl=False)
        return

    write_fragment_file(output, contribution, format=fmt)
    console.print(f"[green]wrote[/green] {output}")
