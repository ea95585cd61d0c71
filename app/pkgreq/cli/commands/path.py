"""Path command implementation.

Prints the search path for an existing packages directory.
"""

from pathlib import Path
from typing import Annotated

import typer

from pkgreq.core.config import ConfigError, load_settings
from pkgreq.core.searchpath import build_search_path, format_addpath
from pkgreq.utils.formatting import console, print_error


def show_path(
    root: Annotated[
        Path,
        typer.Argument(help="Packages directory.", exists=True, file_okay=False),
    ],
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Directory name to leave out (repeatable). Defaults to the configured names.",
        ),
    ] = None,
    addpath: Annotated[
        bool,
        typer.Option("--addpath", help="Print an Octave/MATLAB addpath statement."),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file.", dir_okay=False),
    ] = None,
) -> None:
    """Print every directory under ROOT that belongs on the search path.

    'private' folders and folders starting with '@' or '+' are always left out.
    """
    if exclude is None:
        try:
            exclude = load_settings(config).exclude_dirs
        except ConfigError as e:
            print_error(f"Failed to load settings: {e}")
            raise typer.Exit(code=2) from e

    paths = build_search_path(root, exclude)

    if addpath:
        console.print(format_addpath(paths), markup=False, soft_wrap=True)
        return
    for p in paths:
        console.print(str(p), markup=False, soft_wrap=True)
