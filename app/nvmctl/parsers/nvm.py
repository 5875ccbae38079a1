"""Parsers for nvm and nvm-windows command output.

Each function takes the raw text a version manager printed and returns
plain values. Keeping them free of subprocess calls means format drift in
either tool shows up in one place and can be tested against captured
output.
"""

import logging
import re

from nvmctl.models.runtime import is_version, normalize_version

logger = logging.getLogger(__name__)

_VERSION_TOKEN_RE = re.compile(r"v?\d+\.\d+\.\d+")

# nvm-windows exits 0 on many failures and reports them on stdout instead
_WINDOWS_ERROR_RE = re.compile(
    r"(^\s*error\b)|(exit status \d+)|(is not installed)|(not yet installed)",
    re.IGNORECASE | re.MULTILINE,
)


def parse_windows_available(output: str) -> str | None:
    """Pick the latest LTS release from ``nvm list available`` (nvm-windows).

    The output is a pipe-delimited table::

        |   CURRENT    |     LTS      |  OLD STABLE  | OLD UNSTABLE |
        |--------------|--------------|--------------|--------------|
        |    21.6.1    |   20.11.0    |   0.12.18    |   0.11.16    |

    The value in the LTS column of the first data row is returned. When no
    LTS header is present, the first version-shaped cell of the first data
    row is used instead.

    Args:
        output: Raw stdout of ``nvm list available``.

    Returns:
        Normalized version, or None if no row holds a version.
    """
    lts_column: int | None = None

    for line in output.splitlines():
        if "|" not in line:
            continue
        cells = [cell.strip() for cell in line.strip().strip("|").split("|")]

        if lts_column is None and any(cell.upper() == "LTS" for cell in cells):
            lts_column = next(i for i, cell in enumerate(cells) if cell.upper() == "LTS")
            continue

        if lts_column is not None and lts_column < len(cells) and is_version(cells[lts_column]):
            return normalize_version(cells[lts_column])

        if lts_column is None:
            for cell in cells:
                if is_version(cell):
                    return normalize_version(cell)

    logger.debug("No version found in nvm list available output")
    return None


def parse_unix_remote_lts(output: str) -> str | None:
    """Pick the latest LTS release from ``nvm ls-remote --lts`` (Unix nvm).

    nvm lists releases oldest first, one per line, and tags the newest
    release of every LTS line with ``(Latest LTS: <codename>)``::

               v18.20.0   (Latest LTS: Hydrogen)
               v20.10.0   (LTS: Iron)
        ->     v20.11.0   (Latest LTS: Iron)

    The last tagged line wins; without tags, the last version line is used.

    Args:
        output: Raw stdout of ``nvm ls-remote --lts``.

    Returns:
        Normalized version, or None if no line holds a version.
    """
    last_seen: str | None = None
    last_tagged: str | None = None

    for line in output.splitlines():
        match = _VERSION_TOKEN_RE.search(line)
        if match is None:
            continue
        last_seen = normalize_version(match.group(0))
        if "latest lts" in line.lower():
            last_tagged = last_seen

    if last_seen is None:
        logger.debug("No version found in nvm ls-remote output")
    return last_tagged or last_seen


def parse_current(output: str) -> str | None:
    """Extract the active version from ``nvm current``.

    Both managers print something like ``v20.11.0``; when nothing is active
    they print ``none``, ``system`` or ``No current version``.

    Returns:
        Normalized version, or None when no nvm-managed version is active.
    """
    match = _VERSION_TOKEN_RE.search(output)
    if match is None:
        return None
    return normalize_version(match.group(0))


def is_listed(output: str, version: str) -> bool:
    """Check whether a version appears as a whole token in a listing.

    ``18.20.0`` matches ``18.20.0`` and ``v18.20.0``, but not ``118.20.0``
    or ``18.20.00``.

    Args:
        output: Raw output of the manager's list command.
        version: Version to look for (with or without ``v`` tag).

    Returns:
        True if the version is listed.
    """
    bare = normalize_version(version)
    pattern = re.compile(rf"(?<![\w.])v?{re.escape(bare)}(?![\w.])")
    return pattern.search(output) is not None


def windows_reported_error(output: str) -> bool:
    """Check if nvm-windows output reports a failure despite exit code 0."""
    return _WINDOWS_ERROR_RE.search(output) is not None


def parse_listed_versions(output: str) -> list[str]:
    """Extract every version shown by the installed-versions listing.

    Works for both ``nvm ls --no-alias`` (``->     v20.11.0 *``) and
    nvm-windows ``nvm list`` (``  * 20.11.0 (Currently using ...)``).

    Returns:
        Unique normalized versions in the order first seen.
    """
    versions = (normalize_version(token) for token in _VERSION_TOKEN_RE.findall(output))
    return list(dict.fromkeys(versions))
