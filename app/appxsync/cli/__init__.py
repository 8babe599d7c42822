"""CLI package for appxsync.

This package contains the Typer application and all subcommands.
"""

from appxsync.cli.main import app

__all__ = ["app"]
