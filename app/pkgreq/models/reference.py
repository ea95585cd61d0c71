"""Requirement and package reference models.

This module defines the data structures for a single requirement line
and the typed package reference it resolves to.
"""

from dataclasses import dataclass, field
from enum import Enum


class SourceKind(Enum):
    """Enumeration of package sources a requirement can resolve to."""

    FORGE = "forge"
    EXCHANGE = "fex"
    URL = "url"
    UNRECOGNIZED = "unrecognized"

    @property
    def label(self) -> str:
        """Human-readable source name for progress output."""
        return _LABELS[self]


_LABELS: dict[SourceKind, str] = {
    SourceKind.FORGE: "Octave Forge",
    SourceKind.EXCHANGE: "FileExchange",
    SourceKind.URL: "URL",
    SourceKind.UNRECOGNIZED: "unrecognized",
}


@dataclass(frozen=True, slots=True)
class RequirementEntry:
    """One line of a requirements list, with whitespace and comments removed.

    Attributes:
        original: The text exactly as it was given.
        text: Trimmed text with any inline comment stripped.
        comment: Inline comment text (without the leading '#'), if any.
    """

    original: str
    text: str
    comment: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.text:
            msg = "Requirement entry text cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PackageReference:
    """Normalized, typed description of one package to install.

    Attributes:
        kind: Source the package is installed from.
        identifier: Package name (Forge), numeric id (Exchange) or the
            full URL (URL). For unrecognized entries, the entry text.
        protocol: Scheme prefix found on the line (e.g. 'forge', 'https'),
            or None if the kind was inferred from the bare text.
        entry: The requirement entry this reference was classified from.
    """

    kind: SourceKind
    identifier: str
    protocol: str | None = None
    entry: RequirementEntry | None = None

    def __post_init__(self) -> None:
        """Validate reference data after initialization."""
        if not self.identifier:
            msg = "Package identifier cannot be empty"
            raise ValueError(msg)
        if self.kind == SourceKind.EXCHANGE and not self.identifier.isdigit():
            msg = f"FileExchange id must be numeric, got {self.identifier!r}"
            raise ValueError(msg)

    @property
    def is_recognized(self) -> bool:
        """Check if the reference maps to an installable source."""
        return self.kind != SourceKind.UNRECOGNIZED

    @property
    def text(self) -> str:
        """Entry text the reference came from, falling back to the identifier."""
        if self.entry is not None:
            return self.entry.text
        return self.identifier
