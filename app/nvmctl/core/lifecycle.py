"""Runtime version lifecycle operations.

Install, activate, and uninstall runtime versions, plus the fallback that
deletes a version's folder when the manager's own uninstall leaves a
phantom entry behind.

A version being repaired moves through these states::

    installed -> uninstall-attempted -> uninstalled
                                     -> still-listed -> skip
                                                     -> force-removed -> no-longer-listed
                                                                      -> still-listed-warn

with two extra endings for a missing folder that is still listed (stale
manager metadata) and a folder that could not be deleted.
"""

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from nvmctl.core.inventory import RuntimeInventory
from nvmctl.managers.base import VersionManager
from nvmctl.models.action import ActionResult, ActionType, Decision
from nvmctl.utils.shell import CommandResult

logger = logging.getLogger(__name__)


class RepairOutcome(Enum):
    """Terminal state of repairing one runtime version."""

    UNINSTALLED = "uninstalled"
    NO_LONGER_LISTED = "no-longer-listed"
    STILL_LISTED_WARN = "still-listed-warn"
    METADATA_PHANTOM = "metadata-phantom"
    REMOVE_FAILED = "remove-failed"
    SKIPPED = "skip"

    @property
    def needs_operator(self) -> bool:
        """Check if the version is left in a state only manual work can fix."""
        return self in (
            RepairOutcome.STILL_LISTED_WARN,
            RepairOutcome.METADATA_PHANTOM,
            RepairOutcome.REMOVE_FAILED,
        )


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of deleting a version's folder directly.

    Attributes:
        path: Folder that was found, or None if neither candidate exists.
        removed: Whether the folder was deleted.
        error: Error message if deletion failed.
    """

    path: Path | None
    removed: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class RepairReport:
    """What happened while repairing one version.

    Attributes:
        version: Runtime version.
        outcome: Terminal state reached.
        removal: Folder deletion attempt, if one was made.
    """

    version: str
    outcome: RepairOutcome
    removal: RemovalResult | None = None


class VersionLifecycle:
    """Install, switch, and remove runtime versions.

    Every operation reports failure as a boolean or result object and logs
    the reason; nothing propagates past this class.
    """

    def __init__(self, manager: VersionManager, inventory: RuntimeInventory) -> None:
        """Initialize the lifecycle operations.

        Args:
            manager: Version manager adapter.
            inventory: Inventory used to verify removals.
        """
        self.manager = manager
        self.inventory = inventory

    def install(self, version: str) -> bool:
        """Install a runtime version."""
        return self._run_step("install", version, self.manager.install)

    def activate(self, version: str) -> bool:
        """Switch the active runtime version."""
        return self._run_step("use", version, self.manager.use)

    def uninstall(self, version: str) -> bool:
        """Uninstall a runtime version.

        A True result only means the manager did not report a failure; it
        may still list the version afterwards. Confirm with
        ``RuntimeInventory.is_still_present``.
        """
        return self._run_step("uninstall", version, self.manager.uninstall)

    def uninstall_verified(self, version: str) -> ActionResult:
        """Uninstall a version and confirm it is gone from the listing.

        Returns:
            ActionResult that fails when the uninstall failed or the version
            is still listed.
        """
        uninstalled = self.uninstall(version)
        still_listed = self.inventory.is_still_present(version)

        if uninstalled and not still_listed:
            return ActionResult(
                action_type=ActionType.UNINSTALL,
                target=version,
                decision=Decision.PROCEED,
                success=True,
                message="Uninstalled",
            )

        error = "Uninstall failed" if not uninstalled else "Still listed after uninstall"
        return ActionResult(
            action_type=ActionType.UNINSTALL,
            target=version,
            decision=Decision.PROCEED,
            success=False,
            error=error,
        )

    def find_version_dir(self, version: str) -> Path | None:
        """Locate a version's folder, trying ``vX.Y.Z`` before ``X.Y.Z``."""
        for candidate in self.manager.version_dir_candidates(version):
            if candidate.exists():
                return candidate
        return None

    def force_remove(self, version: str) -> RemovalResult:
        """Delete a version's folder directly.

        Only for versions the manager failed to uninstall. The manager's
        settings are never edited; if no folder exists the caller has to
        guide the operator instead.

        Returns:
            RemovalResult describing what was found and deleted.
        """
        path = self.find_version_dir(version)
        if path is None:
            logger.info("No folder found for Node.js %s", version)
            return RemovalResult(path=None, removed=False)

        logger.info("Deleting %s", path)
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.error("Failed to delete %s: %s", path, e)
            return RemovalResult(path=path, removed=False, error=str(e))
        return RemovalResult(path=path, removed=True)

    def repair(self, version: str, confirm_removal: Callable[[str], bool]) -> RepairReport:
        """Uninstall a version, falling back to folder deletion for phantoms.

        Args:
            version: Version to get rid of.
            confirm_removal: Asked before deleting a folder directly; returns
                False to skip.

        Returns:
            RepairReport with the terminal state reached.
        """
        uninstalled = self.uninstall(version)
        if uninstalled and not self.inventory.is_still_present(version):
            return RepairReport(version=version, outcome=RepairOutcome.UNINSTALLED)

        if not confirm_removal(version):
            return RepairReport(version=version, outcome=RepairOutcome.SKIPPED)

        removal = self.force_remove(version)

        if removal.path is None:
            outcome = (
                RepairOutcome.METADATA_PHANTOM
                if self.inventory.is_still_present(version)
                else RepairOutcome.NO_LONGER_LISTED
            )
            return RepairReport(version=version, outcome=outcome, removal=removal)

        if not removal.removed:
            return RepairReport(
                version=version, outcome=RepairOutcome.REMOVE_FAILED, removal=removal
            )

        outcome = (
            RepairOutcome.STILL_LISTED_WARN
            if self.inventory.is_still_present(version)
            else RepairOutcome.NO_LONGER_LISTED
        )
        return RepairReport(version=version, outcome=outcome, removal=removal)

    def _run_step(self, verb: str, version: str, step: Callable[[str], CommandResult]) -> bool:
        """Run one manager subcommand and reduce it to success or failure."""
        try:
            result = step(version)
        except OSError as e:
            logger.error("nvm %s %s could not run: %s", verb, version, e)
            return False

        if not result.success:
            logger.error(
                "nvm %s %s failed: %s",
                verb,
                version,
                result.error_message,
            )
            return False
        logger.debug("nvm %s %s succeeded", verb, version)
        return True
