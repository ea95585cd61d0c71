"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import io
import tarfile
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
from pkgreq.core.config import Settings
from pkgreq.core.fetch import NoDownloadError


class FakeFetcher:
    """Fetcher that serves canned bytes instead of touching the network.

    Attributes:
        responses: Mapping of URL to the bytes to write. URLs missing from
            the mapping fail with NoDownloadError.
        calls: (url, destination) pairs in call order.
    """

    def __init__(self, responses: dict[str, bytes] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, Path]] = []

    def fetch(self, url: str, destination: Path) -> Path:
        self.calls.append((url, destination))
        if url not in self.responses:
            raise NoDownloadError(url, "HTTP 404 Not Found")
        destination.write_bytes(self.responses[url])
        return destination


def build_zip(files: dict[str, bytes]) -> bytes:
    """Create zip archive bytes containing the given files."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


def build_tar(files: dict[str, bytes], mode: str = "w:gz") -> bytes:
    """Create tar archive bytes (gzip-compressed by default)."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode=mode) as tf:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tf.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    """Fetcher with no canned responses; tests add their own."""
    return FakeFetcher()


@pytest.fixture
def packages_root(tmp_path: Path) -> Path:
    """Packages directory inside the test's temporary directory."""
    return tmp_path / "external"


@pytest.fixture
def staging_root(packages_root: Path) -> Path:
    """Default staging directory inside the packages directory."""
    return packages_root / ".cache"


@pytest.fixture
def zip_bytes() -> Callable[[dict[str, bytes]], bytes]:
    """Factory for zip archive bytes."""
    return build_zip


@pytest.fixture
def tar_bytes() -> Callable[..., bytes]:
    """Factory for tar archive bytes."""
    return build_tar


@pytest.fixture
def exchange_url(settings: Settings) -> Callable[[str], str]:
    """Build the FileExchange download URL for an id."""

    def _url(package_id: str) -> str:
        return f"{settings.exchange_base_url}{package_id}{settings.exchange_query}"

    return _url
