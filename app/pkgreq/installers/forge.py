"""Octave Forge installer.

Installs a package through Octave's own package manager. Forge packages
only make sense inside Octave, so when no Octave executable is found the
installer does nothing and reports the entry as skipped.
"""

import functools
import logging
import re
import subprocess
from pathlib import Path

from pkgreq.core.config import Settings
from pkgreq.installers.base import Installer, InstallError
from pkgreq.models.reference import PackageReference, SourceKind
from pkgreq.models.result import InstallResult, InstallStatus
from pkgreq.utils.shell import find_command, run_command

logger = logging.getLogger(__name__)

# Forge package names are spliced into an Octave command line
_VALID_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class ForgeInstallError(InstallError):
    """Raised when Octave's package manager fails to install a package."""


@functools.cache
def detect_forge_runtime(preferred: str = "octave-cli") -> str | None:
    """Find the Octave executable used for Forge installs.

    The result is cached for the lifetime of the process.

    Args:
        preferred: Executable to look for first; 'octave' is the fallback.

    Returns:
        Name of the executable, or None if Octave is not installed.
    """
    command = find_command(preferred, "octave")
    if command is None:
        logger.debug("No Octave executable found on PATH")
    return command


class ForgeInstaller(Installer):
    """Installer for Octave Forge packages.

    Args:
        settings: Installer settings (Octave command and timeout).
        available: Override runtime detection. None means detect.
    """

    def __init__(self, settings: Settings | None = None, available: bool | None = None) -> None:
        super().__init__(settings)
        self._available = available

    @property
    def kind(self) -> SourceKind:
        """Return FORGE as the source kind."""
        return SourceKind.FORGE

    def is_available(self) -> bool:
        """Check if Forge packages can be installed in this environment."""
        if self._available is not None:
            return self._available
        return detect_forge_runtime(self._settings.octave_command) is not None

    def build_command(self, package: str) -> list[str]:
        """Build the Octave command that installs a package and checks it loads.

        The load runs in the same short-lived Octave process, so it only
        verifies the package; sessions still enable it with `pkg load`.

        Raises:
            ForgeInstallError: If the package name is not a valid Forge name.
        """
        if not _VALID_NAME_RE.match(package):
            msg = f"Invalid Octave Forge package name: {package!r}"
            raise ForgeInstallError(msg)
        executable = detect_forge_runtime(self._settings.octave_command) or self._settings.octave_command
        script = f"pkg install -forge {package}; pkg load {package}"
        return [executable, "--quiet", "--eval", script]

    def install(
        self,
        ref: PackageReference,
        packages_root: Path,
        staging_root: Path,
    ) -> InstallResult:
        """Install a package from Octave Forge.

        Forge packages go to Octave's own package directory, so
        packages_root and staging_root are not used.

        Args:
            ref: FORGE reference; identifier is the bare package name.
            packages_root: Unused.
            staging_root: Unused.

        Returns:
            INSTALLED result, or SKIPPED outside an Octave environment.

        Raises:
            ForgeInstallError: If Octave reports a failure. Dependency
                errors usually mean the requirements are out of order.
        """
        self._check_kind(ref)
        package = ref.identifier

        if not self.is_available():
            logger.info("Skipping Octave Forge package %s: not running under Octave", package)
            return InstallResult(
                entry=ref.text,
                status=InstallStatus.SKIPPED,
                reference=ref,
                message="Octave not available",
            )

        args = self.build_command(package)
        logger.info("Installing %s from Octave Forge", package)

        try:
            result = run_command(args, timeout=float(self._settings.forge_timeout_seconds))
        except subprocess.TimeoutExpired as e:
            msg = f"Octave Forge install of {package} timed out after {e.timeout:.0f}s"
            raise ForgeInstallError(msg) from e
        except OSError as e:
            msg = f"Could not run Octave for {package}: {e}"
            raise ForgeInstallError(msg) from e

        if not result.success:
            error_msg = result.stderr.strip() or result.stdout.strip() or "pkg install failed"
            msg = f"Octave Forge install of {package} failed: {error_msg}"
            raise ForgeInstallError(msg)

        return InstallResult(
            entry=ref.text,
            status=InstallStatus.INSTALLED,
            reference=ref,
            message="Installed and loaded",
        )
