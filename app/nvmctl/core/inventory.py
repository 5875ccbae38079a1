"""Runtime inventory.

Answers which Node.js versions are installed, which release is the latest
stable one, and whether the version manager still lists a given version.
"""

import logging

from nvmctl.managers.base import VersionManager
from nvmctl.models.runtime import is_version, normalize_version, sort_versions
from nvmctl.parsers.nvm import is_listed, parse_listed_versions

logger = logging.getLogger(__name__)


class RuntimeInventory:
    """Queries the version manager and its installation root.

    Nothing here raises: missing tools, missing directories and unreadable
    output all degrade to an empty or absent answer with a logged reason.
    """

    def __init__(self, manager: VersionManager) -> None:
        """Initialize the inventory.

        Args:
            manager: Version manager adapter to query.
        """
        self.manager = manager

    def list_installed(self) -> list[str]:
        """List installed runtime versions in ascending order.

        Scans the manager's versions directory for entries named
        ``X.Y.Z`` or ``vX.Y.Z``; anything else is ignored.

        Returns:
            Normalized versions. Empty if the directory is absent or holds
            no runtimes.
        """
        versions_dir = self.manager.versions_dir
        if not versions_dir.is_dir():
            logger.warning("Version directory not found: %s", versions_dir)
            return []

        found: set[str] = set()
        try:
            entries = list(versions_dir.iterdir())
        except OSError as e:
            logger.warning("Cannot read version directory %s: %s", versions_dir, e)
            return []

        for entry in entries:
            if entry.is_dir() and is_version(entry.name):
                found.add(normalize_version(entry.name))

        if not found:
            logger.warning("No Node.js installations found in %s", versions_dir)
        return sort_versions(list(found))

    def latest_stable(self) -> str | None:
        """Determine the latest stable (LTS) release from the remote listing.

        Returns:
            Normalized version, or None if the listing failed or held no
            version. Callers must stop rather than substitute a default.
        """
        try:
            result = self.manager.list_remote()
        except OSError as e:
            logger.error("Could not run the version manager: %s", e)
            return None

        if not result.success:
            logger.error("Listing available versions failed: %s", result.error_message)
            return None

        version = self.manager.parse_latest_stable(result.stdout)
        if version is None:
            logger.error("Could not detect latest LTS version from listing")
        return version

    def is_still_present(self, version: str) -> bool:
        """Check whether the manager's listing still shows a version.

        Used to confirm an uninstall actually took effect.

        Returns:
            True if the version appears as a whole token. False if it does
            not, or if the listing could not be obtained.
        """
        try:
            result = self.manager.list_versions()
        except OSError as e:
            logger.warning("Could not list versions: %s", e)
            return False

        if not result.success:
            logger.warning("Listing installed versions failed: %s", result.error_message)
            return False
        return is_listed(result.output, version)

    def listed_versions(self) -> list[str]:
        """List the versions the manager itself reports as installed.

        Unlike ``list_installed`` this includes entries whose folder is
        already gone, which is what phantom cleanup has to see.

        Returns:
            Sorted normalized versions, or an empty list if the listing
            failed.
        """
        try:
            result = self.manager.list_versions()
        except OSError as e:
            logger.warning("Could not list versions: %s", e)
            return []

        if not result.success:
            logger.warning("Listing installed versions failed: %s", result.error_message)
            return []
        return sort_versions(parse_listed_versions(result.output))
