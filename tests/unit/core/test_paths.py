"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pkgreq.core.paths import (
    APP_NAME,
    ensure_dir,
    get_config_dir,
    get_config_path,
    get_default_requirements_path,
)


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestFilePaths:
    """Tests for file path helpers."""

    def test_config_path(self, tmp_path: Path) -> None:
        """Settings live in config.toml under the config dir."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"

    def test_default_requirements_path(self, tmp_path: Path) -> None:
        """The default requirements file is requirements.txt in cwd."""
        assert get_default_requirements_path(tmp_path) == tmp_path / "requirements.txt"


class TestEnsureDir:
    """Tests for ensure_dir function."""

    def test_creates_nested(self, tmp_path: Path) -> None:
        """Missing parents are created."""
        target = tmp_path / "a" / "b"

        assert ensure_dir(target, "test") == target
        assert target.is_dir()

    def test_existing_is_fine(self, tmp_path: Path) -> None:
        """An existing directory is returned unchanged."""
        assert ensure_dir(tmp_path, "test") == tmp_path

    def test_blocked_by_file(self, tmp_path: Path) -> None:
        """A file in the way raises RuntimeError naming the directory."""
        blocker = tmp_path / "file"
        blocker.write_text("x")

        with pytest.raises(RuntimeError, match="Cannot create packages directory"):
            ensure_dir(blocker / "sub", "packages")
