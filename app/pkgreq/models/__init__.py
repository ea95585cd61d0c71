"""Data models for pkgreq.

This module exports the core data structures used throughout the application.
"""

from pkgreq.models.reference import PackageReference, RequirementEntry, SourceKind
from pkgreq.models.result import InstallResult, InstallStatus, RunReport

__all__ = [
    "InstallResult",
    "InstallStatus",
    "PackageReference",
    "RequirementEntry",
    "RunReport",
    "SourceKind",
]
