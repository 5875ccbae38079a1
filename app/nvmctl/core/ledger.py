"""Package ledger.

A plain-text record of the global packages of each runtime version, used
to restore packages onto a freshly installed runtime. One block per
version::

    Node Version: 18.20.0
    eslint, typescript

    Node Version: 20.11.0
    (No global packages installed)

"""

import logging
from pathlib import Path

from nvmctl.models.runtime import BOOTSTRAP_PACKAGE

logger = logging.getLogger(__name__)

HEADER_PREFIX = "Node Version:"
NO_PACKAGES_MARKER = "(No global packages installed)"


class PackageLedger:
    """Reads and writes the package ledger file.

    Attributes:
        path: Location of the ledger file.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the ledger.

        Args:
            path: Location of the ledger file.
        """
        self.path = path

    def exists(self) -> bool:
        """Check if the ledger file exists."""
        return self.path.is_file()

    def write(self, entries: list[tuple[str, list[str]]]) -> Path:
        """Overwrite the ledger with one block per version.

        Args:
            entries: ``(version, package names)`` pairs in display order.

        Returns:
            Path the ledger was written to.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(render(entries), encoding="utf-8")
        logger.info("Wrote package ledger for %d version(s) to %s", len(entries), self.path)
        return self.path

    def read(self) -> list[str]:
        """Read the deduplicated, sorted union of all recorded package names.

        Returns:
            Package names, excluding npm. Empty if the file is missing or
            unreadable; the ledger has to be written first.
        """
        if not self.exists():
            logger.warning("Package ledger not found: %s", self.path)
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read package ledger %s: %s", self.path, e)
            return []
        return parse(text)


def render(entries: list[tuple[str, list[str]]]) -> str:
    """Render ledger entries to text."""
    blocks: list[str] = []
    for version, packages in entries:
        body = ", ".join(packages) if packages else NO_PACKAGES_MARKER
        blocks.append(f"{HEADER_PREFIX} {version}\n{body}\n\n")
    return "".join(blocks)


def parse(text: str) -> list[str]:
    """Parse ledger text into a sorted list of unique package names."""
    names: set[str] = set()
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(HEADER_PREFIX) or stripped == NO_PACKAGES_MARKER:
            continue
        for token in stripped.split(","):
            name = token.strip()
            if name and name != BOOTSTRAP_PACKAGE:
                names.add(name)
    return sorted(names)
