"""Settings commands.

Shows, initializes and locates the settings file.
"""

from pathlib import Path
from typing import Annotated

import typer

from pkgreq.core.config import ConfigError, Settings, load_settings, save_settings, settings_to_toml
from pkgreq.core.paths import get_config_path
from pkgreq.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Inspect and initialize settings.",
    no_args_is_help=True,
)


@app.command()
def show(
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file.", dir_okay=False),
    ] = None,
) -> None:
    """Print the effective settings as TOML."""
    try:
        settings = load_settings(config)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e
    console.print(settings_to_toml(settings), markup=False, highlight=False)


@app.command()
def init(
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file to create.", dir_okay=False),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file containing the defaults."""
    target = config or get_config_path()
    if target.exists() and not force:
        print_error(f"Settings file already exists: {target}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        written = save_settings(Settings(), target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Settings written to {written}")


@app.command()
def path() -> None:
    """Print the default settings file location."""
    console.print(str(get_config_path()), markup=False, soft_wrap=True)
