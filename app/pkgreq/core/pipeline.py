"""Requirement pipeline orchestration.

Runs a requirements list through classification and the matching
installer, one entry at a time and strictly in input order, then builds
the search path for the packages directory.

Each entry is isolated: a download failure, an unrecognized line or an
installer error is recorded in that entry's result and processing moves
on to the next entry. Pass ``fail_fast=True`` to re-raise installer and
extraction errors instead.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from pkgreq.core.classifier import classify
from pkgreq.core.config import Settings
from pkgreq.core.extract import ExtractionError
from pkgreq.core.fetch import Fetcher, HttpFetcher
from pkgreq.core.paths import ensure_dir
from pkgreq.core.requirements import RequirementInput, resolve_input
from pkgreq.core.searchpath import build_search_path
from pkgreq.installers.base import Installer, InstallError
from pkgreq.installers.exchange import ExchangeInstaller
from pkgreq.installers.forge import ForgeInstaller
from pkgreq.installers.url import UrlInstaller
from pkgreq.models.reference import SourceKind
from pkgreq.models.result import InstallResult, InstallStatus, RunReport

logger = logging.getLogger(__name__)

ResultCallback = Callable[[InstallResult], None]


def default_installers(
    settings: Settings,
    fetcher: Fetcher | None = None,
    forge_available: bool | None = None,
) -> list[Installer]:
    """Build one installer per source kind.

    Args:
        settings: Settings shared by all installers.
        fetcher: Download primitive shared by the downloading installers.
        forge_available: Override Octave detection for the Forge installer.

    Returns:
        List of installer instances.
    """
    fetcher = fetcher or HttpFetcher(settings)
    return [
        ForgeInstaller(settings, available=forge_available),
        ExchangeInstaller(settings, fetcher=fetcher),
        UrlInstaller(settings, fetcher=fetcher),
    ]


class RequirementPipeline:
    """Installs a requirements list into a packages directory.

    Args:
        settings: Settings for installers and search path exclusions.
        installers: Installers to dispatch to. Defaults to one per kind.
        fetcher: Download primitive used when building default installers.
        forge_available: Override Octave detection when building defaults.

    Example:
        >>> pipeline = RequirementPipeline()
        >>> report = pipeline.run(["forge://io", "fex://55540"], Path("external"))
        >>> [r.status for r in report.results]
    """

    def __init__(
        self,
        settings: Settings | None = None,
        installers: Iterable[Installer] | None = None,
        *,
        fetcher: Fetcher | None = None,
        forge_available: bool | None = None,
    ) -> None:
        self._settings = settings or Settings()
        if installers is None:
            installers = default_installers(self._settings, fetcher, forge_available)
        self._installers: dict[SourceKind, Installer] = {i.kind: i for i in installers}

    @property
    def settings(self) -> Settings:
        """Settings the pipeline was created with."""
        return self._settings

    def staging_root_for(self, packages_root: Path) -> Path:
        """Default staging directory inside a packages directory."""
        return packages_root / self._settings.staging_dir_name

    def search_path_exclusions(self, staging_root: Path) -> frozenset[str]:
        """Directory names kept out of the generated search path."""
        return frozenset({staging_root.name, *self._settings.exclude_dirs})

    def run(
        self,
        requirements: RequirementInput,
        packages_root: Path,
        *,
        extend_path: bool = True,
        staging_root: Path | None = None,
        fail_fast: bool = False,
        on_result: ResultCallback | None = None,
    ) -> RunReport:
        """Install every entry of a requirements input.

        Args:
            requirements: Requirement input (list, string, file path,
                FileExchange id, or None for ./requirements.txt).
            packages_root: Directory to install packages into. Created
                if missing.
            extend_path: Build the search path after installing.
            staging_root: Directory for transient downloads. Defaults to
                '<packages_root>/.cache'.
            fail_fast: Re-raise installer and extraction errors instead
                of recording them and continuing.
            on_result: Called with each entry's result as soon as it is known.

        Returns:
            RunReport with one result per entry and the search path.

        Raises:
            BadInputError: If the input shape is unsupported or the
                requirements file cannot be read or decoded. Raised
                before anything is installed.
            RuntimeError: If the packages directory cannot be created.
        """
        source = resolve_input(requirements)
        packages_root = Path(packages_root)
        staging_root = Path(staging_root) if staging_root else self.staging_root_for(packages_root)

        ensure_dir(packages_root, "packages")
        logger.info("Installing %s into %s", source.describe(), packages_root)

        results: list[InstallResult] = []
        for line in source.iter_lines():
            result = self.process(line, packages_root, staging_root, fail_fast=fail_fast)
            if result is None:
                continue
            results.append(result)
            if on_result is not None:
                on_result(result)

        search_path: tuple[Path, ...] = ()
        if extend_path:
            search_path = tuple(
                build_search_path(packages_root, self.search_path_exclusions(staging_root))
            )
            logger.info("Generated %d search path entries", len(search_path))

        return RunReport(
            packages_root=packages_root,
            results=tuple(results),
            search_path=search_path,
        )

    def process(
        self,
        line: str,
        packages_root: Path,
        staging_root: Path,
        *,
        fail_fast: bool = False,
    ) -> InstallResult | None:
        """Classify and install a single requirement line.

        Args:
            line: Raw requirement line.
            packages_root: Directory to install packages into.
            staging_root: Directory for transient downloads.
            fail_fast: Re-raise installer and extraction errors.

        Returns:
            InstallResult, or None if the line is blank or a comment.
        """
        ref = classify(line)
        if ref is None:
            return None

        logger.info("%s ... is %s", ref.text, ref.kind.label)

        if not ref.is_recognized:
            logger.warning("Skipping unrecognized requirement %r", ref.text)
            return InstallResult(
                entry=ref.text,
                status=InstallStatus.UNRECOGNIZED,
                reference=ref,
                error="Entry matches no known package format",
            )

        installer = self._installers.get(ref.kind)
        if installer is None:
            return InstallResult(
                entry=ref.text,
                status=InstallStatus.FAILED,
                reference=ref,
                error=f"No installer configured for {ref.kind.label} packages",
            )

        try:
            return installer.install(ref, packages_root, staging_root)
        except (InstallError, ExtractionError, OSError) as e:
            if fail_fast:
                raise
            logger.error("Failed to install %s: %s", ref.text, e)
            return InstallResult(
                entry=ref.text,
                status=InstallStatus.FAILED,
                reference=ref,
                error=str(e),
            )
