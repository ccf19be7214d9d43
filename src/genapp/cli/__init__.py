"""Command-line interface for genapp."""

from genapp.cli.app import app

__all__ = ["app"]
