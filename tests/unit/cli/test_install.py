"""Unit tests for the install command."""

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pkgreq.cli.commands.install import _to_input
from pkgreq.cli.main import app
from pkgreq.core.pipeline import RequirementPipeline
from pkgreq.core.requirements import BadInputError
from pkgreq.installers.base import InstallError
from pkgreq.models.reference import PackageReference, SourceKind
from pkgreq.models.result import InstallResult, InstallStatus, RunReport
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def no_config(tmp_path: Path) -> list[str]:
    """Point the command at a settings file that does not exist."""
    return ["--config", str(tmp_path / "missing.toml")]


def _report(root: Path, *statuses: InstallStatus, search_path: tuple[Path, ...] = ()) -> RunReport:
    results = tuple(
        InstallResult(
            entry=f"pkg{i}",
            status=status,
            reference=PackageReference(kind=SourceKind.FORGE, identifier=f"pkg{i}"),
        )
        for i, status in enumerate(statuses)
    )
    return RunReport(packages_root=root, results=results, search_path=search_path)


class TestToInput:
    """Tests for mapping arguments onto pipeline input."""

    def test_no_arguments(self) -> None:
        """No arguments selects the default requirements file."""
        assert _to_input(None) is None
        assert _to_input([]) is None

    def test_single_argument(self) -> None:
        """One argument is passed as a string (file path or entry)."""
        assert _to_input(["requirements.txt"]) == "requirements.txt"

    def test_many_arguments(self) -> None:
        """Several arguments are a list of entries."""
        assert _to_input(["io", "55540"]) == ["io", "55540"]


class TestInstallCommand:
    """Tests for the install command."""

    def test_help(self) -> None:
        """install --help describes the entry formats."""
        result = runner.invoke(app, ["install", "--help"])

        assert result.exit_code == 0
        assert "forge://" in result.output

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_success(self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]) -> None:
        """A clean run exits 0 and summarizes."""
        dest = tmp_path / "external"
        mock_cls.return_value.run.return_value = _report(
            dest, InstallStatus.INSTALLED, InstallStatus.SKIPPED, search_path=(dest,)
        )

        result = runner.invoke(app, ["install", "forge://io", "55540", "-d", str(dest), *no_config])

        assert result.exit_code == 0
        assert "installed successfully" in result.output
        args, kwargs = mock_cls.return_value.run.call_args
        assert args == (["forge://io", "55540"], dest)
        assert kwargs["extend_path"] is True
        assert kwargs["fail_fast"] is False

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_failure_exit_code(self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]) -> None:
        """Failed entries make the command exit 1."""
        mock_cls.return_value.run.return_value = _report(
            tmp_path, InstallStatus.INSTALLED, InstallStatus.NO_DOWNLOAD
        )

        result = runner.invoke(app, ["install", "x", *no_config])

        assert result.exit_code == 1
        assert "not downloaded" in result.output

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_warns_on_missing_requirements_file(
        self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]
    ) -> None:
        """A lone argument that looks like a missing file is flagged."""
        mock_cls.return_value.run.return_value = _report(tmp_path, InstallStatus.UNRECOGNIZED)

        result = runner.invoke(app, ["install", "reqs-typo.txt", *no_config])

        assert "No file named reqs-typo.txt" in result.output

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_no_file_warning_for_entries(
        self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]
    ) -> None:
        """Plain entries and URLs are not mistaken for file paths."""
        mock_cls.return_value.run.return_value = _report(tmp_path, InstallStatus.INSTALLED)

        for entry in ("control", "https://host/pkg.zip", "fex://55540"):
            result = runner.invoke(app, ["install", entry, *no_config])
            assert "No file named" not in result.output

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_unrecognized_is_a_warning(self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]) -> None:
        """Unrecognized entries are reported but do not fail the run."""
        mock_cls.return_value.run.return_value = _report(
            tmp_path, InstallStatus.INSTALLED, InstallStatus.UNRECOGNIZED
        )

        result = runner.invoke(app, ["install", "x", *no_config])

        assert result.exit_code == 0
        assert "unrecognized" in result.output

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_bad_input_exit_code(self, mock_cls: MagicMock, no_config: list[str]) -> None:
        """Bad input exits 2."""
        mock_cls.return_value.run.side_effect = BadInputError("No requirements given")

        result = runner.invoke(app, ["install", *no_config])

        assert result.exit_code == 2
        assert "No requirements given" in result.output

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_fail_fast_error(self, mock_cls: MagicMock, no_config: list[str]) -> None:
        """An installer error under --fail-fast exits 1."""
        mock_cls.return_value.run.side_effect = InstallError("boom")

        result = runner.invoke(app, ["install", "x", "--fail-fast", *no_config])

        assert result.exit_code == 1
        assert mock_cls.return_value.run.call_args.kwargs["fail_fast"] is True

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_addpath_output(self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]) -> None:
        """--addpath prints an addpath statement."""
        mock_cls.return_value.run.return_value = _report(
            tmp_path, InstallStatus.INSTALLED, search_path=(tmp_path,)
        )

        result = runner.invoke(app, ["install", "x", "--addpath", *no_config])

        assert result.exit_code == 0
        assert "addpath('" in result.output

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_path_file(self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]) -> None:
        """--path-file writes the search path."""
        search_path = (tmp_path, tmp_path / "pkg")
        mock_cls.return_value.run.return_value = _report(
            tmp_path, InstallStatus.INSTALLED, search_path=search_path
        )
        out = tmp_path / "out" / "path.txt"

        result = runner.invoke(app, ["install", "x", "--path-file", str(out), *no_config])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == os.pathsep.join(str(p) for p in search_path) + "\n"

    @patch("pkgreq.cli.commands.install.RequirementPipeline")
    def test_no_path(self, mock_cls: MagicMock, tmp_path: Path, no_config: list[str]) -> None:
        """--no-path disables search path generation."""
        mock_cls.return_value.run.return_value = _report(tmp_path, InstallStatus.INSTALLED)

        runner.invoke(app, ["install", "x", "--no-path", *no_config])

        assert mock_cls.return_value.run.call_args.kwargs["extend_path"] is False

    def test_invalid_settings(self, tmp_path: Path) -> None:
        """A broken settings file exits 2 before installing."""
        config = tmp_path / "config.toml"
        config.write_text("timeout_seconds = 1\n")

        with patch("pkgreq.cli.commands.install.RequirementPipeline") as mock_cls:
            result = runner.invoke(app, ["install", "x", "--config", str(config)])

        assert result.exit_code == 2
        mock_cls.assert_not_called()

    def test_end_to_end_with_fake_network(
        self,
        tmp_path: Path,
        fake_fetcher,
        exchange_url,
        no_config: list[str],
    ) -> None:
        """A requirements file is installed into the destination."""
        fake_fetcher.responses[exchange_url("55540")] = b"function dummy()\nend\n"
        req = tmp_path / "requirements.txt"
        req.write_text("# deps\nfex://55540-dummy-package  # note\n", encoding="utf-8")
        dest = tmp_path / "external"

        def build(settings):
            return RequirementPipeline(settings, fetcher=fake_fetcher, forge_available=False)

        with patch("pkgreq.cli.commands.install.RequirementPipeline", side_effect=build):
            result = runner.invoke(app, ["install", str(req), "-d", str(dest), *no_config])

        assert result.exit_code == 0
        assert (dest / "55540" / "55540.m").is_file()
