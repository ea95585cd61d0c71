"""Result models for requirement installation.

This module defines data structures for the outcome of installing a
single requirement and the report for a whole pipeline run.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pkgreq.models.reference import PackageReference, SourceKind


class InstallStatus(Enum):
    """Outcome of processing one requirement entry.

    Attributes:
        INSTALLED: Package was fetched and placed (or installed by Forge).
        SKIPPED: Entry was valid but intentionally not installed, e.g. a
            Forge package outside an Octave environment.
        UNRECOGNIZED: Entry matched none of the classification rules.
        NO_DOWNLOAD: The package could not be downloaded.
        FAILED: Installation raised an error for this entry.
    """

    INSTALLED = "installed"
    SKIPPED = "skipped"
    UNRECOGNIZED = "unrecognized"
    NO_DOWNLOAD = "no-download"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Result of processing a single requirement entry.

    Attributes:
        entry: Requirement text as classified (comments removed).
        status: Outcome of the entry.
        reference: Classified package reference, if classification succeeded.
        target: Directory the package was placed in, if any.
        extracted: True if an archive was unpacked, False if the download
            was copied as a plain file. None when nothing was placed.
        message: Optional success message or additional information.
        error: Optional error message if the entry did not install.
    """

    entry: str
    status: InstallStatus
    reference: PackageReference | None = None
    target: Path | None = None
    extracted: bool | None = None
    message: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if the entry completed without a problem."""
        return self.status in (InstallStatus.INSTALLED, InstallStatus.SKIPPED)

    @property
    def failed(self) -> bool:
        """Check if the entry failed or could not be downloaded."""
        return self.status in (InstallStatus.FAILED, InstallStatus.NO_DOWNLOAD)

    @property
    def kind(self) -> SourceKind:
        """Source kind of the entry (UNRECOGNIZED if never classified)."""
        if self.reference is None:
            return SourceKind.UNRECOGNIZED
        return self.reference.kind


@dataclass(frozen=True, slots=True)
class RunReport:
    """Report for one run of the requirement pipeline.

    Attributes:
        packages_root: Directory packages were installed into.
        results: One result per processed entry, in input order.
        search_path: Directories generated for the search path. Empty
            when path extension was disabled.
    """

    packages_root: Path
    results: tuple[InstallResult, ...] = field(default_factory=tuple)
    search_path: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def installed(self) -> tuple[InstallResult, ...]:
        """Results for entries that were installed."""
        return tuple(r for r in self.results if r.status == InstallStatus.INSTALLED)

    @property
    def failures(self) -> tuple[InstallResult, ...]:
        """Results for entries that failed or could not be downloaded."""
        return tuple(r for r in self.results if r.failed)

    @property
    def ok(self) -> bool:
        """True if no entry failed."""
        return not self.failures

    def count(self, status: InstallStatus) -> int:
        """Count results with the given status."""
        return sum(1 for r in self.results if r.status == status)
