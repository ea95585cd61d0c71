"""XDG-compliant path management for pkgreq.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, plus the fixed names used inside a
packages directory.

XDG defaults:
- Config: ~/.config/pkgreq/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "pkgreq"

# Requirements file looked up in the working directory when no input is given
DEFAULT_REQUIREMENTS_FILE = "requirements.txt"

# Staging directory created inside the packages directory by default
DEFAULT_STAGING_DIR_NAME = ".cache"

# Directory names kept out of the generated search path by default
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (DEFAULT_STAGING_DIR_NAME, "tests")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/pkgreq/ (or XDG_CONFIG_HOME/pkgreq/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/pkgreq/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_default_requirements_path(cwd: Path | None = None) -> Path:
    """Get the requirements file used when no input is given.

    Args:
        cwd: Directory to look in. Defaults to the current working directory.

    Returns:
        Path to requirements.txt in that directory.
    """
    return (cwd or Path.cwd()) / DEFAULT_REQUIREMENTS_FILE


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
