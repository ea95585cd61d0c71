"""Archive extraction.

Unpacks a downloaded file into a package directory, choosing the format
from the file name. Content sniffing is available for callers whose
staged file name carries no useful extension.

Supported by name:
    .tar.gz, .zip, .gz, .tar, .tgz
Extended formats:
    anything registered with shutil (.tar.bz2, .tbz2, .tar.xz, .txz),
    single-file .bz2 and .xz

A file that is not an archive raises NotExtractableError. Installers
treat this as "plain file", not as a failure.
"""

import bz2
import gzip
import logging
import lzma
import shutil
import tarfile
import zipfile
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

# Formats handled directly; checked before the shutil registry
FORMAT_TAR_GZ = "tar.gz"
FORMAT_ZIP = "zip"
FORMAT_GZIP = "gz"
FORMAT_TAR = "tar"
FORMAT_BZIP2 = "bz2"
FORMAT_XZ = "xz"

_SINGLE_EXTENSIONS: dict[str, str] = {
    ".zip": FORMAT_ZIP,
    ".gz": FORMAT_GZIP,
    ".tar": FORMAT_TAR,
    ".tgz": FORMAT_TAR,
}

_COMPRESSED_FILE_EXTENSIONS: dict[str, str] = {
    ".bz2": FORMAT_BZIP2,
    ".xz": FORMAT_XZ,
}


class NotExtractableError(Exception):
    """Raised when a file is not a recognized archive."""


class ExtractionError(Exception):
    """Raised when a recognized archive cannot be unpacked."""


def detect_format(path: Path) -> str | None:
    """Determine the archive format from a file name.

    Args:
        path: Archive path. Only the name is inspected.

    Returns:
        Format identifier, or None if the name is not a known archive type.
        Extended formats are returned as the shutil format name
        (e.g. 'bztar').
    """
    name = path.name.lower()
    if name.endswith(".tar.gz"):
        return FORMAT_TAR_GZ

    ext = path.suffix.lower()
    if ext in _SINGLE_EXTENSIONS:
        return _SINGLE_EXTENSIONS[ext]

    for format_name, extensions, _ in shutil.get_unpack_formats():
        if any(name.endswith(e) for e in extensions):
            return format_name

    return _COMPRESSED_FILE_EXTENSIONS.get(ext)


def sniff_format(path: Path) -> str | None:
    """Determine the archive format from file content.

    Recognizes zip archives and tar archives (compressed or not).

    Args:
        path: File to inspect.

    Returns:
        Format identifier, or None if the content is not a known archive.
    """
    if zipfile.is_zipfile(path):
        return FORMAT_ZIP
    try:
        if tarfile.is_tarfile(path):
            return FORMAT_TAR
    except OSError:
        pass
    return None


def extract(path: Path, destination: Path, *, sniff: bool = False) -> str:
    """Extract an archive into a directory.

    Args:
        path: Archive file.
        destination: Directory to unpack into. Created if missing.
        sniff: If the name is not a known archive type, inspect the
            content before giving up.

    Returns:
        Format identifier of the archive that was unpacked.

    Raises:
        FileNotFoundError: If path does not exist.
        NotExtractableError: If the file is not a recognized archive.
        ExtractionError: If a recognized archive is corrupt or unsafe.
    """
    if not path.is_file():
        msg = f"File {path} does not exist"
        raise FileNotFoundError(msg)

    fmt = detect_format(path)
    if fmt is None and sniff:
        fmt = sniff_format(path)
        if fmt is not None:
            logger.debug("Detected %s content in %s", fmt, path.name)
    if fmt is None:
        ext = path.suffix or "(none)"
        msg = f"Can't extract file with extension {ext}"
        raise NotExtractableError(msg)

    destination.mkdir(parents=True, exist_ok=True)
    logger.info("Extracting %s (%s) into %s", path.name, fmt, destination)

    try:
        _unpack(path, destination, fmt)
    except (zipfile.BadZipFile, tarfile.TarError, EOFError, lzma.LZMAError, OSError) as e:
        msg = f"Failed to extract {path.name}: {e}"
        raise ExtractionError(msg) from e

    return fmt


def try_extract(path: Path, destination: Path, *, sniff: bool = False) -> bool:
    """Extract an archive, reporting non-archives instead of raising.

    Returns:
        True if the file was unpacked, False if it is not an archive.

    Raises:
        FileNotFoundError: If path does not exist.
        ExtractionError: If a recognized archive is corrupt or unsafe.
    """
    try:
        extract(path, destination, sniff=sniff)
    except NotExtractableError as e:
        logger.debug("%s", e)
        return False
    return True


def _unpack(path: Path, destination: Path, fmt: str) -> None:
    """Dispatch to the unpacker for a format."""
    if fmt in (FORMAT_TAR_GZ, FORMAT_TAR):
        with tarfile.open(path, "r:*") as tf:
            tf.extractall(destination, filter="data")
    elif fmt == FORMAT_ZIP:
        with zipfile.ZipFile(path) as zf:
            _check_zip_members(zf, destination)
            zf.extractall(destination)
    elif fmt == FORMAT_GZIP:
        _decompress(gzip.open(path, "rb"), destination / _strip_suffix(path.name, ".gz"))
    elif fmt == FORMAT_BZIP2:
        _decompress(bz2.open(path, "rb"), destination / _strip_suffix(path.name, ".bz2"))
    elif fmt == FORMAT_XZ:
        _decompress(lzma.open(path, "rb"), destination / _strip_suffix(path.name, ".xz"))
    else:
        shutil.unpack_archive(path, destination, format=fmt, filter="data")


def _check_zip_members(zf: zipfile.ZipFile, destination: Path) -> None:
    """Reject zip members that would land outside destination."""
    root = destination.resolve()
    for name in zf.namelist():
        try:
            (root / name).resolve().relative_to(root)
        except ValueError:
            msg = f"Archive member {name!r} escapes the destination directory"
            raise ExtractionError(msg) from None


def _decompress(source: BinaryIO, target: Path) -> None:
    """Stream a single compressed file to target, removing it on failure."""
    try:
        with source as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst)
    except BaseException:
        target.unlink(missing_ok=True)
        raise


def _strip_suffix(name: str, suffix: str) -> str:
    """Remove a suffix case-insensitively, keeping the name non-empty."""
    if name.lower().endswith(suffix) and len(name) > len(suffix):
        return name[: -len(suffix)]
    return f"{name}.out"
