"""MATLAB FileExchange installer.

Downloads a FileExchange submission by numeric id and unpacks it into
``<packages_root>/<id>/``. Submissions that are a single m-file rather
than a zip archive are stored as ``<id>.m``.
"""

import logging
from pathlib import Path

from pkgreq.installers.base import DownloadInstaller
from pkgreq.models.reference import PackageReference, SourceKind
from pkgreq.models.result import InstallResult, InstallStatus

logger = logging.getLogger(__name__)


class ExchangeInstaller(DownloadInstaller):
    """Installer for MATLAB FileExchange packages."""

    @property
    def kind(self) -> SourceKind:
        """Return EXCHANGE as the source kind."""
        return SourceKind.EXCHANGE

    def download_url(self, package_id: str) -> str:
        """Build the direct-download URL for a FileExchange id."""
        return f"{self._settings.exchange_base_url}{package_id}{self._settings.exchange_query}"

    def install(
        self,
        ref: PackageReference,
        packages_root: Path,
        staging_root: Path,
    ) -> InstallResult:
        """Download and place a FileExchange package.

        Args:
            ref: EXCHANGE reference; identifier is the numeric id.
            packages_root: Directory holding one folder per package.
            staging_root: Directory for the transient '<id>.tmp' download.

        Returns:
            INSTALLED result, or NO_DOWNLOAD if the fetch failed.
        """
        self._check_kind(ref)
        package_id = ref.identifier
        url = self.download_url(package_id)
        logger.info("Installing package %s from FileExchange", package_id)

        staged = staging_root / f"{package_id}.tmp"
        error = self._download(url, staged)
        if error is not None:
            return self._no_download(ref, error)

        target = packages_root / package_id
        # Staged as .tmp, so archives are detected by content
        extracted = self._place(staged, target, f"{package_id}.m", sniff=True)

        return InstallResult(
            entry=ref.text,
            status=InstallStatus.INSTALLED,
            reference=ref,
            target=target,
            extracted=extracted,
            message="Extracted archive" if extracted else f"Copied as {package_id}.m",
        )
