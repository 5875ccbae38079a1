"""Data models for nvmctl.

This module exports the core data structures used throughout the application.
"""

from nvmctl.models.action import (
    ActionResult,
    ActionType,
    Decision,
    PackageCheck,
    skipped_result,
)
from nvmctl.models.runtime import (
    BOOTSTRAP_PACKAGE,
    GlobalPackage,
    Platform,
    is_version,
    normalize_version,
    sort_versions,
    version_key,
)

__all__ = [
    "BOOTSTRAP_PACKAGE",
    "ActionResult",
    "ActionType",
    "Decision",
    "GlobalPackage",
    "PackageCheck",
    "Platform",
    "is_version",
    "normalize_version",
    "skipped_result",
    "sort_versions",
    "version_key",
]
