"""CLI package for pkgreq.

This package contains the Typer application and all subcommands.
"""

from pkgreq.cli.main import app

__all__ = ["app"]
