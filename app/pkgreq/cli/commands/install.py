"""Install command implementation.

Installs a requirements list (Octave Forge, FileExchange and URL
packages) into a packages directory and reports the search path.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from pkgreq.cli.display import create_results_table, print_report_summary, print_result_line
from pkgreq.core.config import ConfigError, load_settings
from pkgreq.core.extract import ExtractionError
from pkgreq.core.pipeline import RequirementPipeline
from pkgreq.core.requirements import BadInputError, RequirementInput
from pkgreq.core.searchpath import format_addpath, format_search_path
from pkgreq.installers.base import InstallError
from pkgreq.utils.formatting import console, print_error, print_info, print_success, print_warning

# Exit code for malformed input or settings, before any work is attempted
EXIT_BAD_INPUT = 2


def _looks_like_missing_file(arg: str) -> bool:
    """Check if an argument reads as a file path that does not exist."""
    if "://" in arg or Path(arg).exists():
        return False
    return "/" in arg or arg.lower().endswith(".txt")


def _to_input(requirements: list[str] | None) -> RequirementInput:
    """Map command line arguments onto a pipeline input."""
    if not requirements:
        return None
    if len(requirements) == 1:
        if _looks_like_missing_file(requirements[0]):
            print_warning(
                f"No file named {escape(requirements[0])}; treating it as a requirement entry."
            )
        return requirements[0]
    return requirements


def install(
    requirements: Annotated[
        list[str] | None,
        typer.Argument(
            help="Requirements file or requirement entries. Defaults to ./requirements.txt.",
            show_default=False,
        ),
    ] = None,
    dest: Annotated[
        Path,
        typer.Option(
            "--dest",
            "-d",
            help="Directory to install packages into.",
            file_okay=False,
        ),
    ] = Path("external"),
    cache_dir: Annotated[
        Path | None,
        typer.Option(
            "--cache-dir",
            "-c",
            help="Directory for transient downloads. Defaults to DEST/.cache.",
            file_okay=False,
        ),
    ] = None,
    no_path: Annotated[
        bool,
        typer.Option(
            "--no-path",
            help="Don't generate the search path after installing.",
        ),
    ] = False,
    path_file: Annotated[
        Path | None,
        typer.Option(
            "--path-file",
            help="Write the generated search path to this file.",
            dir_okay=False,
        ),
    ] = None,
    addpath: Annotated[
        bool,
        typer.Option(
            "--addpath",
            help="Print the search path as an Octave/MATLAB addpath statement.",
        ),
    ] = False,
    fail_fast: Annotated[
        bool,
        typer.Option(
            "--fail-fast",
            help="Stop at the first package that fails to install.",
        ),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Settings file. Defaults to ~/.config/pkgreq/config.toml.",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Install packages from a requirements list.

    Each entry is an Octave Forge package, a FileExchange id or a URL:

      forge://control        Octave Forge package (also: control, control>=3.0)
      fex://55540-dummy      FileExchange id (also: 55540, 55540-dummy)
      https://host/pkg.zip   Any other URL

    Packages are processed in order, so list dependencies first.

    Examples:
        pkgreq install                         # ./requirements.txt into ./external
        pkgreq install reqs.txt -d deps        # A requirements file
        pkgreq install forge://io 55540        # Entries on the command line
        pkgreq install --addpath               # Print an addpath(...) statement
    """
    try:
        settings = load_settings(config)
    except ConfigError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=EXIT_BAD_INPUT) from e

    pipeline = RequirementPipeline(settings)

    try:
        report = pipeline.run(
            _to_input(requirements),
            dest,
            extend_path=not no_path,
            staging_root=cache_dir,
            fail_fast=fail_fast,
            on_result=print_result_line,
        )
    except BadInputError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_BAD_INPUT) from e
    except (InstallError, ExtractionError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except (RuntimeError, OSError) as e:
        print_error(f"Installation aborted: {e}")
        raise typer.Exit(code=1) from e

    if report.results:
        console.print()
        console.print(create_results_table(report.results))
    print_report_summary(report)

    if report.search_path:
        if addpath:
            console.print(format_addpath(report.search_path), markup=False, soft_wrap=True)
        else:
            print_info(f"{len(report.search_path)} director(ies) on the search path.")
        if path_file is not None:
            path_file.parent.mkdir(parents=True, exist_ok=True)
            path_file.write_text(format_search_path(report.search_path) + "\n", encoding="utf-8")
            print_success(f"Search path written to {path_file}")

    if not report.ok:
        raise typer.Exit(code=1)
