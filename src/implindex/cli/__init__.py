"""implindex command-line interface."""

from implindex.cli.app import app

__all__ = ["app"]
