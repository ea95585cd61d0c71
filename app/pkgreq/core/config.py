"""Settings for pkgreq.

This module provides the settings model and I/O functions for the
installer: download endpoints, timeouts, the Octave executable and the
search path exclusions.

Settings are stored in ~/.config/pkgreq/config.toml. A missing file
means all defaults apply.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pkgreq import __version__
from pkgreq.core.paths import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_STAGING_DIR_NAME,
    get_config_path,
)

logger = logging.getLogger(__name__)

DEFAULT_EXCHANGE_BASE_URL = "https://www.mathworks.com/matlabcentral/fileexchange/"
DEFAULT_EXCHANGE_QUERY = "?download=true"


class Settings(BaseModel):
    """Configuration for requirement installation.

    Attributes:
        exchange_base_url: Endpoint a FileExchange id is appended to.
        exchange_query: Query string forcing a direct download.
        timeout_seconds: Network timeout for a single download.
        user_agent: User-Agent header sent with downloads.
        octave_command: Octave executable used for Forge installs.
        forge_timeout_seconds: Maximum time for one Forge install.
        staging_dir_name: Default staging directory name inside the
            packages directory.
        exclude_dirs: Directory names kept out of the search path.
        sniff_url_archives: Detect zip/tar content for URL downloads whose
            extension is not a known archive type.
    """

    model_config = ConfigDict(extra="forbid")

    exchange_base_url: Annotated[
        str,
        Field(description="FileExchange download endpoint"),
    ] = DEFAULT_EXCHANGE_BASE_URL
    exchange_query: Annotated[
        str,
        Field(description="Query string appended to FileExchange downloads"),
    ] = DEFAULT_EXCHANGE_QUERY
    timeout_seconds: Annotated[
        int,
        Field(ge=5, le=3600, description="Download timeout in seconds (5-3600)"),
    ] = 60
    user_agent: Annotated[
        str,
        Field(description="User-Agent header for downloads"),
    ] = f"pkgreq/{__version__}"
    octave_command: Annotated[
        str,
        Field(description="Octave executable for Forge installs"),
    ] = "octave-cli"
    forge_timeout_seconds: Annotated[
        int,
        Field(ge=60, le=7200, description="Forge install timeout in seconds (60-7200)"),
    ] = 1800
    staging_dir_name: Annotated[
        str,
        Field(min_length=1, description="Default staging directory name"),
    ] = DEFAULT_STAGING_DIR_NAME
    exclude_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS),
        description="Directory names excluded from the search path",
    )
    sniff_url_archives: Annotated[
        bool,
        Field(description="Detect archives by content for URL downloads"),
    ] = False

    @field_validator("exchange_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute URL ending in a slash."""
        if "://" not in v:
            msg = f"exchange_base_url must be an absolute URL, got {v!r}"
            raise ValueError(msg)
        return v if v.endswith("/") else f"{v}/"

    @field_validator("staging_dir_name")
    @classmethod
    def validate_staging_dir_name(cls, v: str) -> str:
        """Require a single path component."""
        if "/" in v or "\\" in v or v in (".", ".."):
            msg = f"staging_dir_name must be a plain directory name, got {v!r}"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for settings errors."""


class ConfigParseError(ConfigError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object. Defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file can't be read or doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No settings file at %s, using defaults", config_path)
        return Settings()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {config_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = settings.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write settings: {e}") from e

    return config_path


def settings_to_toml(settings: Settings) -> str:
    """Render settings as TOML text."""
    return tomli_w.dumps(settings.model_dump(mode="json"))
