"""CLI commands for pkgreq.

This package contains all subcommand implementations.
"""

from pkgreq.cli.commands import classify, config, install, path

__all__ = ["classify", "config", "install", "path"]
