"""Download primitive used by the FileExchange and URL installers.

HTTP(S) downloads go through a requests session. ``ftp://`` and
``file://`` locations are served by urllib, since requests ships no
adapter for them. Every failure surfaces as NoDownloadError, and a
partially written file is never left behind.
"""

import logging
import shutil
import urllib.error
import urllib.request
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit

import requests

from pkgreq.core.config import Settings

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
_URLLIB_SCHEMES = ("ftp", "file")


class NoDownloadError(Exception):
    """Raised when a package could not be downloaded."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not download {url}: {reason}")


class Fetcher(Protocol):
    """Anything that can download a URL to a local file."""

    def fetch(self, url: str, destination: Path) -> Path:
        """Download url to destination and return the written path.

        Raises:
            NoDownloadError: If the download failed for any reason.
        """
        ...


class HttpFetcher:
    """Fetcher backed by a requests session.

    Args:
        settings: Provides the timeout and User-Agent.
        session: Optional pre-built session (mainly for tests).
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = self._settings.user_agent

    @property
    def timeout(self) -> float:
        """Timeout in seconds for a single request."""
        return float(self._settings.timeout_seconds)

    def fetch(self, url: str, destination: Path) -> Path:
        """Download url to destination.

        Args:
            url: Location to download.
            destination: File to write. Its parent must exist.

        Returns:
            The destination path.

        Raises:
            NoDownloadError: On a non-success status, a transport error,
                an unsupported scheme, or a local write failure.
        """
        scheme = urlsplit(url).scheme.lower()
        logger.info("Downloading %s -> %s", url, destination)
        try:
            if scheme in ("http", "https"):
                self._fetch_http(url, destination)
            elif scheme in _URLLIB_SCHEMES:
                self._fetch_urllib(url, destination)
            else:
                raise NoDownloadError(url, f"unsupported scheme {scheme or '(none)'!r}")
        except NoDownloadError:
            destination.unlink(missing_ok=True)
            raise
        except (requests.RequestException, urllib.error.URLError, OSError, ValueError) as e:
            destination.unlink(missing_ok=True)
            raise NoDownloadError(url, str(e)) from e

        logger.debug("Downloaded %d bytes to %s", destination.stat().st_size, destination)
        return destination

    def _fetch_http(self, url: str, destination: Path) -> None:
        with self._session.get(url, stream=True, timeout=self.timeout, allow_redirects=True) as resp:
            if not resp.ok:
                raise NoDownloadError(url, f"HTTP {resp.status_code} {resp.reason or ''}".strip())
            with open(destination, "wb") as f:
                for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)

    def _fetch_urllib(self, url: str, destination: Path) -> None:
        request = urllib.request.Request(url, headers={"User-Agent": self._settings.user_agent})
        with (
            urllib.request.urlopen(request, timeout=self.timeout) as resp,  # nosec: B310
            open(destination, "wb") as f,
        ):
            shutil.copyfileobj(resp, f, _CHUNK_SIZE)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()
