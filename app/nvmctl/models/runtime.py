"""Runtime version and global package models.

Node.js versions are carried around as normalized ``major.minor.patch``
strings; the helpers here validate, normalize, and order them.
"""

import re
import sys
from dataclasses import dataclass
from enum import Enum

# The package manager ships with every runtime and is never a user package
BOOTSTRAP_PACKAGE = "npm"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


class Platform(Enum):
    """Version manager flavour, determined by the host operating system."""

    UNIX = "unix"
    WINDOWS = "windows"

    @classmethod
    def detect(cls) -> "Platform":
        """Return the platform matching the running interpreter."""
        return cls.WINDOWS if sys.platform == "win32" else cls.UNIX


def is_version(text: str) -> bool:
    """Check whether text is a strict ``major.minor.patch`` version.

    A single leading ``v`` tag is accepted.
    """
    return _VERSION_RE.match(text.strip()) is not None


def normalize_version(text: str) -> str:
    """Normalize a version string by trimming it and dropping the ``v`` tag.

    Args:
        text: Raw version such as ``"v20.11.0"`` or ``" 20.11.0 "``.

    Returns:
        The bare version, e.g. ``"20.11.0"``.

    Raises:
        ValueError: If text is not a strict ``major.minor.patch`` version.
    """
    match = _VERSION_RE.match(text.strip())
    if match is None:
        msg = f"Not a valid Node.js version: {text!r}"
        raise ValueError(msg)
    return ".".join(match.groups())


def version_key(version: str) -> tuple[int, int, int]:
    """Sort key ordering versions numerically rather than lexically."""
    major, minor, patch = normalize_version(version).split(".")
    return int(major), int(minor), int(patch)


def sort_versions(versions: list[str]) -> list[str]:
    """Return versions in ascending numeric order."""
    return sorted(versions, key=version_key)


@dataclass(frozen=True, slots=True)
class GlobalPackage:
    """A package installed at runtime-wide scope.

    Identity is the name; the version is informational and may be unknown.

    Attributes:
        name: Registry name, e.g. ``eslint`` or ``@angular/cli``.
        version: Installed version, if known.
    """

    name: str
    version: str | None = None

    def __post_init__(self) -> None:
        """Validate package data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def is_bootstrap(self) -> bool:
        """Check if this is the bundled package manager itself."""
        return self.name == BOOTSTRAP_PACKAGE

    @property
    def label(self) -> str:
        """Display label in ``name@version`` form when the version is known."""
        if self.version:
            return f"{self.name}@{self.version}"
        return self.name
