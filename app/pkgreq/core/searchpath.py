"""Search path generation for installed packages.

Walks a packages directory and lists every directory that should be on
the Octave/MATLAB path, the way ``genpath`` does, while skipping:

- 'private' folders (implementation-only functions)
- folders starting with '@' (class methods) or '+' (namespaces)
- caller-supplied names such as the staging and tests directories
"""

import logging
import os
from collections.abc import Collection, Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

PRIVATE_DIR_NAME = "private"
RESERVED_PREFIXES: tuple[str, ...] = ("@", "+")

_ALWAYS_EXCLUDED: frozenset[str] = frozenset({".", "..", PRIVATE_DIR_NAME})


def is_excluded(name: str, exclude: Collection[str] = ()) -> bool:
    """Check if a directory name is kept out of the search path.

    Args:
        name: Directory basename.
        exclude: Additional names to exclude.

    Returns:
        True if the directory (and everything below it) is skipped.
    """
    if name in _ALWAYS_EXCLUDED or name in exclude:
        return True
    return name.startswith(RESERVED_PREFIXES)


def build_search_path(root: Path, exclude: Iterable[str] = ()) -> list[Path]:
    """List root and every non-excluded directory below it.

    The order is depth-first; siblings appear in directory listing order,
    which is not guaranteed to be sorted.

    Args:
        root: Directory to start from. Always the first entry.
        exclude: Directory names to skip at any depth.

    Returns:
        Ordered list of directories. Empty if root does not exist.
    """
    exclude_set = frozenset(exclude)
    if not root.is_dir():
        logger.debug("Search path root %s is not a directory", root)
        return []

    paths: list[Path] = [root]
    try:
        entries = list(os.scandir(root))
    except PermissionError:
        logger.warning("Permission denied scanning directory: %s", root)
        return paths

    for entry in entries:
        if not entry.is_dir():
            continue
        if is_excluded(entry.name, exclude_set):
            continue
        paths.extend(build_search_path(root / entry.name, exclude_set))

    return paths


def format_search_path(paths: Iterable[Path]) -> str:
    """Join directories with the platform path separator."""
    return os.pathsep.join(str(p) for p in paths)


def format_addpath(paths: Iterable[Path]) -> str:
    """Render an Octave/MATLAB addpath statement for the directories."""
    joined = format_search_path(paths).replace("'", "''")
    return f"addpath('{joined}');"
