"""Package installers for each requirement source.

This module provides the abstract Installer interface and concrete
installers for Octave Forge, MATLAB FileExchange and plain URLs.
"""

from pkgreq.installers.base import DownloadInstaller, Installer, InstallError
from pkgreq.installers.exchange import ExchangeInstaller
from pkgreq.installers.forge import ForgeInstaller, ForgeInstallError, detect_forge_runtime
from pkgreq.installers.url import UrlInstaller

__all__ = [
    "DownloadInstaller",
    "ExchangeInstaller",
    "ForgeInstallError",
    "ForgeInstaller",
    "InstallError",
    "Installer",
    "UrlInstaller",
    "detect_forge_runtime",
]
