"""Unit tests for the Octave Forge installer."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from pkgreq.core.config import Settings
from pkgreq.installers.forge import ForgeInstaller, ForgeInstallError, detect_forge_runtime
from pkgreq.models.reference import PackageReference, SourceKind
from pkgreq.models.result import InstallStatus
from pkgreq.utils.shell import CommandResult


@pytest.fixture
def ref() -> PackageReference:
    return PackageReference(kind=SourceKind.FORGE, identifier="control", protocol="forge")


@pytest.fixture(autouse=True)
def clear_runtime_cache():
    detect_forge_runtime.cache_clear()
    yield
    detect_forge_runtime.cache_clear()


class TestDetectForgeRuntime:
    """Tests for detect_forge_runtime function."""

    def test_prefers_configured_command(self) -> None:
        """The preferred executable wins when present."""
        with patch("pkgreq.installers.forge.find_command", return_value="octave-cli") as mock:
            assert detect_forge_runtime("octave-cli") == "octave-cli"

        mock.assert_called_once_with("octave-cli", "octave")

    def test_none_when_missing(self) -> None:
        """None is returned when no Octave is on PATH."""
        with patch("pkgreq.installers.forge.find_command", return_value=None):
            assert detect_forge_runtime() is None

    def test_result_is_cached(self) -> None:
        """Detection runs once per process."""
        with patch("pkgreq.installers.forge.find_command", return_value="octave") as mock:
            detect_forge_runtime()
            detect_forge_runtime()

        mock.assert_called_once()


class TestForgeInstaller:
    """Tests for ForgeInstaller class."""

    def test_kind(self) -> None:
        """Installer handles FORGE references."""
        assert ForgeInstaller().kind == SourceKind.FORGE

    def test_is_available_override(self) -> None:
        """An explicit availability flag skips detection."""
        with patch("pkgreq.installers.forge.detect_forge_runtime") as mock:
            assert ForgeInstaller(available=False).is_available() is False
            assert ForgeInstaller(available=True).is_available() is True

        mock.assert_not_called()

    def test_is_available_detects(self) -> None:
        """Without override, availability follows runtime detection."""
        with patch("pkgreq.installers.forge.detect_forge_runtime", return_value=None):
            assert ForgeInstaller().is_available() is False

    def test_skipped_when_unavailable(self, ref: PackageReference, tmp_path: Path) -> None:
        """Outside Octave the entry is skipped without running anything."""
        installer = ForgeInstaller(available=False)

        with patch("pkgreq.installers.forge.run_command") as mock_run:
            result = installer.install(ref, tmp_path / "external", tmp_path / "cache")

        assert result.status == InstallStatus.SKIPPED
        assert result.success
        mock_run.assert_not_called()
        assert not (tmp_path / "external").exists()

    def test_build_command(self) -> None:
        """The command installs from Forge, then checks the package loads."""
        installer = ForgeInstaller(Settings(octave_command="octave-cli"))

        with patch("pkgreq.installers.forge.detect_forge_runtime", return_value="octave"):
            args = installer.build_command("control")

        assert args == ["octave", "--quiet", "--eval", "pkg install -forge control; pkg load control"]

    @pytest.mark.parametrize("name", ["con;trol", "a b", "-flag", "x'y", ""])
    def test_build_command_rejects_unsafe_names(self, name: str) -> None:
        """Names that could alter the Octave command are rejected."""
        with pytest.raises(ForgeInstallError, match="Invalid"):
            ForgeInstaller().build_command(name)

    def test_install_success(self, ref: PackageReference, tmp_path: Path) -> None:
        """A zero exit status means INSTALLED."""
        installer = ForgeInstaller(Settings(forge_timeout_seconds=120), available=True)

        with (
            patch("pkgreq.installers.forge.detect_forge_runtime", return_value="octave-cli"),
            patch(
                "pkgreq.installers.forge.run_command",
                return_value=CommandResult(stdout="", stderr="", returncode=0),
            ) as mock_run,
        ):
            result = installer.install(ref, tmp_path, tmp_path)

        assert result.status == InstallStatus.INSTALLED
        assert result.message == "Installed and loaded"
        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["timeout"] == 120.0

    def test_install_failure(self, ref: PackageReference, tmp_path: Path) -> None:
        """A non-zero exit raises ForgeInstallError with Octave's message."""
        installer = ForgeInstaller(available=True)
        failed = CommandResult(stdout="", stderr="error: package not found\n", returncode=1)

        with (
            patch("pkgreq.installers.forge.detect_forge_runtime", return_value="octave-cli"),
            patch("pkgreq.installers.forge.run_command", return_value=failed),
            pytest.raises(ForgeInstallError, match="package not found"),
        ):
            installer.install(ref, tmp_path, tmp_path)

    def test_install_timeout(self, ref: PackageReference, tmp_path: Path) -> None:
        """A timeout raises ForgeInstallError."""
        installer = ForgeInstaller(available=True)

        with (
            patch("pkgreq.installers.forge.detect_forge_runtime", return_value="octave-cli"),
            patch(
                "pkgreq.installers.forge.run_command",
                side_effect=subprocess.TimeoutExpired(cmd="octave-cli", timeout=5),
            ),
            pytest.raises(ForgeInstallError, match="timed out"),
        ):
            installer.install(ref, tmp_path, tmp_path)

    def test_install_missing_executable(self, ref: PackageReference, tmp_path: Path) -> None:
        """An executable that vanished raises ForgeInstallError."""
        installer = ForgeInstaller(available=True)

        with (
            patch("pkgreq.installers.forge.detect_forge_runtime", return_value="octave-cli"),
            patch("pkgreq.installers.forge.run_command", side_effect=FileNotFoundError("octave-cli")),
            pytest.raises(ForgeInstallError, match="Could not run Octave"),
        ):
            installer.install(ref, tmp_path, tmp_path)
