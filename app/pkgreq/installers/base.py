"""Abstract base classes for package installers.

This module defines the Installer interface that every package source
must implement, plus the fetch-and-place logic shared by the installers
that download files.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from pkgreq.core.config import Settings
from pkgreq.core.extract import try_extract
from pkgreq.core.fetch import Fetcher, HttpFetcher, NoDownloadError
from pkgreq.core.paths import ensure_dir
from pkgreq.models.reference import PackageReference, SourceKind
from pkgreq.models.result import InstallResult, InstallStatus

logger = logging.getLogger(__name__)


class InstallError(Exception):
    """Base exception for errors while installing a single package."""


class Installer(ABC):
    """Abstract base class for all package installers.

    Installers are responsible for fetching one package from a specific
    source and placing it on disk. Non-fatal outcomes (download failures,
    skipped packages) are returned as results; fatal ones are raised.

    Example:
        >>> installer = ExchangeInstaller()
        >>> result = installer.install(ref, Path("external"), Path("external/.cache"))
        >>> print(result.status)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the installer.

        Args:
            settings: Installer settings. Defaults are used if None.
        """
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        """Settings the installer was created with."""
        return self._settings

    @property
    @abstractmethod
    def kind(self) -> SourceKind:
        """Return the source kind this installer handles."""

    @abstractmethod
    def install(
        self,
        ref: PackageReference,
        packages_root: Path,
        staging_root: Path,
    ) -> InstallResult:
        """Install one package.

        Args:
            ref: Classified reference of this installer's kind.
            packages_root: Directory holding one folder per package.
            staging_root: Directory for transient downloads.

        Returns:
            InstallResult describing the outcome.

        Raises:
            InstallError: If installation failed in a way that should
                stop processing of this entry.
            ExtractionError: If a recognized archive could not be unpacked.
        """

    def _check_kind(self, ref: PackageReference) -> None:
        """Reject references meant for another installer."""
        if ref.kind != self.kind:
            msg = f"Reference kind {ref.kind.value} doesn't match installer kind {self.kind.value}"
            raise ValueError(msg)


class DownloadInstaller(Installer):
    """Installer that downloads a file and unpacks or copies it.

    Args:
        settings: Installer settings.
        fetcher: Download primitive. An HttpFetcher is built if None.
    """

    def __init__(self, settings: Settings | None = None, fetcher: Fetcher | None = None) -> None:
        super().__init__(settings)
        self._fetcher: Fetcher = fetcher or HttpFetcher(self._settings)

    def _download(self, url: str, staged: Path) -> NoDownloadError | None:
        """Fetch url into the staging file.

        Returns:
            None on success, or the NoDownloadError describing the failure.
        """
        _make_dir(staged.parent, "staging")
        try:
            self._fetcher.fetch(url, staged)
        except NoDownloadError as e:
            logger.warning("%s", e)
            return e
        return None

    def _place(self, staged: Path, target: Path, fallback_name: str, *, sniff: bool) -> bool:
        """Unpack a staged download into target, or copy it as a plain file.

        The staged file is deleted afterwards whatever the outcome.

        Args:
            staged: Downloaded file.
            target: Package directory. Created if missing.
            fallback_name: File name used when the download is not an archive.
            sniff: Inspect content when the name is not a known archive type.

        Returns:
            True if an archive was unpacked, False if the file was copied.
        """
        _make_dir(target, "package")
        try:
            if try_extract(staged, target, sniff=sniff):
                logger.info("Successfully decompressed %s", staged.name)
                return True
            logger.info("%s is not an archive, copying it as %s", staged.name, fallback_name)
            shutil.copyfile(staged, target / fallback_name)
            return False
        finally:
            staged.unlink(missing_ok=True)

    def _no_download(self, ref: PackageReference, error: NoDownloadError) -> InstallResult:
        return InstallResult(
            entry=ref.text,
            status=InstallStatus.NO_DOWNLOAD,
            reference=ref,
            error=str(error),
        )


def _make_dir(path: Path, name: str) -> Path:
    """Create a directory, raising InstallError on failure."""
    try:
        return ensure_dir(path, name)
    except RuntimeError as e:
        raise InstallError(str(e)) from e
