"""Action models for package and runtime operations.

This module defines the per-item decisions taken during install and
uninstall loops, the up-to-date check for a package, and the result of
executing an action.
"""

from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Type of operation applied to a package or runtime version.

    Attributes:
        INSTALL: Install or update a global package.
        UNINSTALL: Remove a runtime version.
    """

    INSTALL = "install"
    UNINSTALL = "uninstall"


class Decision(Enum):
    """Outcome of asking whether to act on one item."""

    PROCEED = "proceed"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class PackageCheck:
    """Installed vs. registry state of one package under a target runtime.

    Attributes:
        name: Package name.
        installed_version: Version installed under the target, if any.
        latest_version: Latest version published on the registry, if known.
    """

    name: str
    installed_version: str | None
    latest_version: str | None

    @property
    def is_up_to_date(self) -> bool:
        """Both versions known and textually identical.

        This is deliberately exact string equality, so a pre-release
        difference such as ``2.0.0`` vs ``2.0.0-rc.1`` counts as outdated.
        """
        return (
            self.installed_version is not None
            and self.latest_version is not None
            and self.installed_version == self.latest_version
        )

    @property
    def is_candidate(self) -> bool:
        """Check if the package is eligible for install/update."""
        return not self.is_up_to_date

    @property
    def is_missing(self) -> bool:
        """Check if the package is not installed under the target at all."""
        return self.installed_version is None


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Result of executing an action on a single item.

    Attributes:
        action_type: What was attempted.
        target: Package name or runtime version acted on.
        decision: Whether the item was acted on or skipped.
        success: Whether the action succeeded (True for skips).
        message: Optional success message.
        error: Error message if the action failed.
    """

    action_type: ActionType
    target: str
    decision: Decision
    success: bool
    message: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        """Validate result data after initialization."""
        if not self.target:
            msg = "Action target cannot be empty"
            raise ValueError(msg)
        if not self.success and not self.error:
            msg = "Failed results must include an error message"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        """Check if the action failed."""
        return not self.success

    @property
    def skipped(self) -> bool:
        """Check if the item was skipped rather than acted on."""
        return self.decision == Decision.SKIP


def skipped_result(action_type: ActionType, target: str) -> ActionResult:
    """Create the result recorded for an item the user chose to skip."""
    return ActionResult(
        action_type=action_type,
        target=target,
        decision=Decision.SKIP,
        success=True,
        message="Skipped",
    )
