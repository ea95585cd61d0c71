"""Requirement input normalization.

The pipeline accepts several input shapes. They are resolved once, at the
entry boundary, into a RequirementSource:

- a sequence of strings             -> one entry per element
- a path to an existing file        -> one entry per line of the file
- any other string                  -> one entry per line of the string
- an integer (or integral float)    -> a FileExchange id
- nothing                           -> ./requirements.txt
"""

import logging
import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pkgreq.core.paths import get_default_requirements_path

logger = logging.getLogger(__name__)

RequirementInput = Sequence[str] | str | Path | int | float | None


class BadInputError(Exception):
    """Raised when the requirement input has an unsupported shape."""


class InputKind(Enum):
    """Shape a requirement input was resolved to."""

    LINES = "lines"
    FILE = "file"
    EXCHANGE_ID = "exchange-id"


@dataclass(frozen=True, slots=True)
class RequirementSource:
    """Resolved requirement input.

    Attributes:
        kind: Which input shape was given.
        lines: Raw entries, already read and decoded for FILE inputs.
        path: Requirements file for FILE inputs.
    """

    kind: InputKind
    lines: tuple[str, ...] = ()
    path: Path | None = None

    def iter_lines(self) -> Iterator[str]:
        """Yield raw requirement lines in input order."""
        yield from self.lines

    def describe(self) -> str:
        """Short description for progress output."""
        if self.kind == InputKind.FILE:
            return f"requirements file {self.path}"
        if self.kind == InputKind.EXCHANGE_ID:
            return f"FileExchange id {self.lines[0]}"
        return f"{len(self.lines)} requirement(s)"


def resolve_input(value: RequirementInput, cwd: Path | None = None) -> RequirementSource:
    """Resolve a requirement input into a RequirementSource.

    Args:
        value: Requirement input in one of the supported shapes.
        cwd: Directory searched for requirements.txt when value is None.

    Returns:
        RequirementSource describing where entries come from.

    Raises:
        BadInputError: If the input shape is not supported or a requirements
            file cannot be read.
    """
    if value is None:
        default = get_default_requirements_path(cwd)
        if not default.is_file():
            msg = (
                "No package list input was given, and a `requirements.txt` "
                f"file could not be found in {default.parent}"
            )
            raise BadInputError(msg)
        return _from_file(default)

    # bool is an int subclass; True is never a FileExchange id
    if isinstance(value, bool):
        msg = "Can't install from type bool"
        raise BadInputError(msg)

    if isinstance(value, int):
        return _exchange_id(value)

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            msg = f"FileExchange id input must be an integer, got {value}"
            raise BadInputError(msg)
        return _exchange_id(int(value))

    if isinstance(value, Path):
        if not value.is_file():
            msg = f"Requirements file not found: {value}"
            raise BadInputError(msg)
        return _from_file(value)

    if isinstance(value, str):
        if value.strip() and _is_file(value):
            return _from_file(Path(value))
        return RequirementSource(kind=InputKind.LINES, lines=tuple(value.splitlines() or [value]))

    if isinstance(value, Sequence):
        lines: list[str] = []
        for index, item in enumerate(value):
            if not isinstance(item, str):
                msg = f"Requirement list item {index} must be a string, got {type(item).__name__}"
                raise BadInputError(msg)
            lines.append(item)
        return RequirementSource(kind=InputKind.LINES, lines=tuple(lines))

    msg = f"Can't install from type {type(value).__name__}"
    raise BadInputError(msg)


def _exchange_id(value: int) -> RequirementSource:
    if value < 0:
        msg = f"FileExchange id input must be non-negative, got {value}"
        raise BadInputError(msg)
    return RequirementSource(kind=InputKind.EXCHANGE_ID, lines=(str(value),))


def _is_file(text: str) -> bool:
    """Check if a string names an existing file, treating unusable paths as 'no'."""
    try:
        return Path(text).is_file()
    except (OSError, ValueError):
        return False


def _from_file(path: Path) -> RequirementSource:
    """Read a requirements file completely so decode errors surface before any install."""
    logger.debug("Reading requirements from %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            lines = tuple(line.rstrip("\r\n") for line in f)
    except UnicodeDecodeError as e:
        msg = f"Requirements file {path} is not valid UTF-8: {e.reason} at byte {e.start}"
        raise BadInputError(msg) from e
    except OSError as e:
        msg = f"Cannot read requirements file {path}: {e}"
        raise BadInputError(msg) from e
    return RequirementSource(kind=InputKind.FILE, lines=lines, path=path)
