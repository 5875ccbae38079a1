"""Output parsers for the external tools nvmctl drives.

This module exports the parsing functions for nvm, nvm-windows and npm.
"""

from nvmctl.parsers.npm import NpmOutputError, parse_global_listing, parse_view_field
from nvmctl.parsers.nvm import (
    is_listed,
    parse_current,
    parse_listed_versions,
    parse_unix_remote_lts,
    parse_windows_available,
    windows_reported_error,
)

__all__ = [
    "NpmOutputError",
    "is_listed",
    "parse_current",
    "parse_global_listing",
    "parse_listed_versions",
    "parse_unix_remote_lts",
    "parse_view_field",
    "parse_windows_available",
    "windows_reported_error",
]
