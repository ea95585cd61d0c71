"""Classify command implementation.

Shows how requirement lines are interpreted without installing anything.
"""

from pathlib import Path
from typing import Annotated

import typer

from pkgreq.cli.display import create_classification_table
from pkgreq.core.classifier import classify
from pkgreq.core.requirements import BadInputError, resolve_input
from pkgreq.models.reference import PackageReference
from pkgreq.utils.formatting import console, print_error


def classify_lines(
    lines: Annotated[
        list[str] | None,
        typer.Argument(help="Requirement lines to classify.", show_default=False),
    ] = None,
    file: Annotated[
        Path | None,
        typer.Option(
            "--file",
            "-f",
            help="Classify every line of a requirements file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Show the source kind and identifier each requirement resolves to.

    Examples:
        pkgreq classify control 55540 https://host/pkg.tar.gz
        pkgreq classify --file requirements.txt
    """
    raw: list[str] = []
    if file is not None:
        try:
            raw.extend(resolve_input(file).iter_lines())
        except (BadInputError, OSError) as e:
            print_error(str(e))
            raise typer.Exit(code=2) from e
    raw.extend(lines or [])

    if not raw:
        print_error("Give requirement lines or --file.")
        raise typer.Exit(code=2)

    rows: list[tuple[str, PackageReference | None]] = [(line, classify(line)) for line in raw]
    console.print(create_classification_table(rows))
