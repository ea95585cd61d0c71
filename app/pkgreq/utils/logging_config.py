"""Logging configuration for the pkgreq command line.

Called once at startup by the CLI callback. Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  PKGREQ_LOG_LEVEL env var  >  WARNING (default)
"""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

from pkgreq.utils.formatting import err_console

LOG_LEVEL_ENV = "PKGREQ_LOG_LEVEL"

# Third-party loggers that are noisy at INFO/DEBUG
_NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Resolve the effective log level from flags and environment.

    Args:
        verbose: --verbose flag; selects INFO.
        quiet: --quiet flag; selects ERROR. Ignored if verbose is set.

    Returns:
        Numeric logging level.
    """
    if verbose:
        return logging.INFO
    if quiet:
        return logging.ERROR
    return _parse_level(os.environ.get(LOG_LEVEL_ENV))


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure Python logging for the entire process.

    Log records go to stderr through Rich so they interleave cleanly
    with console output.

    Args:
        level: Numeric log level.
    """
    handler = RichHandler(
        console=err_console,
        show_path=level <= logging.DEBUG,
        show_time=level <= logging.INFO,
        markup=False,
        rich_tracebacks=level <= logging.DEBUG,
    )
    handler.setLevel(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    if level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    value = logging.getLevelName(level.strip().upper())
    if isinstance(value, int):
        return value
    return logging.WARNING
