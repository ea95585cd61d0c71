"""URL installer.

Downloads a package from an arbitrary location. The package name is the
file name component of the URL with every extension removed, so
``http://host/path/pkg.tar.gz?token=abc`` installs into
``<packages_root>/pkg/``.
"""

import logging
from pathlib import Path

from pkgreq.installers.base import DownloadInstaller, InstallError
from pkgreq.models.reference import PackageReference, SourceKind
from pkgreq.models.result import InstallResult, InstallStatus

logger = logging.getLogger(__name__)


def url_filename(url: str) -> str:
    """Derive the file name a URL points at.

    Drops the query string and a trailing slash, then keeps everything
    after the last remaining '/'.

    Examples:
        >>> url_filename("http://host/path/pkg.zip?token=abc")
        'pkg.zip'
        >>> url_filename("http://host/path/pkg/")
        'pkg'
    """
    filename = url.strip().split("?", 1)[0]
    if filename.endswith("/"):
        filename = filename[:-1]
    return filename.rsplit("/", 1)[-1]


def package_name_from_filename(filename: str) -> str:
    """Strip every extension from a file name.

    A single leading dot is dropped first, so a dotfile keeps its name.

    Examples:
        >>> package_name_from_filename("pkg.tar.gz")
        'pkg'
        >>> package_name_from_filename(".vimrc")
        'vimrc'
    """
    if filename.startswith("."):
        filename = filename[1:]
    return filename.split(".", 1)[0]


class UrlInstaller(DownloadInstaller):
    """Installer for packages given as a URL."""

    @property
    def kind(self) -> SourceKind:
        """Return URL as the source kind."""
        return SourceKind.URL

    def install(
        self,
        ref: PackageReference,
        packages_root: Path,
        staging_root: Path,
    ) -> InstallResult:
        """Download and place a package from a URL.

        Args:
            ref: URL reference; identifier is the full URL.
            packages_root: Directory holding one folder per package.
            staging_root: Directory for the transient download, which keeps
                the URL's original file name.

        Returns:
            INSTALLED result, or NO_DOWNLOAD if the fetch failed.

        Raises:
            InstallError: If no usable package name can be derived.
        """
        self._check_kind(ref)
        url = ref.identifier.strip()
        filename = url_filename(url)
        package = package_name_from_filename(filename)
        if not package or filename in (".", ".."):
            msg = f"Cannot infer a package name from URL {url}"
            raise InstallError(msg)

        logger.info("Downloading %s from URL %s", package, url)

        staged = staging_root / filename
        error = self._download(url, staged)
        if error is not None:
            return self._no_download(ref, error)

        target = packages_root / package
        extracted = self._place(
            staged,
            target,
            package,
            sniff=self._settings.sniff_url_archives,
        )

        return InstallResult(
            entry=ref.text,
            status=InstallStatus.INSTALLED,
            reference=ref,
            target=target,
            extracted=extracted,
            message=f"Extracted {filename}" if extracted else f"Copied as {package}",
        )
