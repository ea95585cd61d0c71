"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from pkgreq import __version__
from pkgreq.cli.commands import classify, config, install, path
from pkgreq.utils.logging_config import resolve_level, setup_logging

# Create main Typer app
app = typer.Typer(
    name="pkgreq",
    help="Install Octave Forge, FileExchange and URL package requirements.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pkgreq version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """pkgreq - Install package requirements for Octave and MATLAB.

    List Octave Forge packages, FileExchange ids and URLs in a
    requirements file and install them into one folder per package.
    """
    setup_logging(resolve_level(verbose=verbose, quiet=quiet))

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="install")(install.install)
app.command(name="classify")(classify.classify_lines)
app.command(name="path")(path.show_path)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
