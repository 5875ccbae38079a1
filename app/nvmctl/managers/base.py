"""Abstract base class for Node.js version managers.

This module defines the VersionManager interface that the nvm and
nvm-windows adapters implement, and the RuntimeContext used to run
commands under a specific runtime version.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from nvmctl.models.runtime import Platform
from nvmctl.parsers.nvm import parse_current
from nvmctl.utils.shell import CommandResult


class ManagerError(RuntimeError):
    """Raised when the version manager cannot report its own state."""


class VersionManager(ABC):
    """Abstract base class for all version manager adapters.

    Adapters know how to invoke the manager's binary, where it keeps
    installed runtimes on disk, and how to read its listings.

    Example:
        >>> manager = NvmManager()
        >>> if manager.is_available():
        ...     result = manager.use("20.11.0")
        ...     print(result.success)
    """

    def __init__(self, home: Path | None = None) -> None:
        """Initialize the adapter.

        Args:
            home: Installation root override. If None, resolved from the
                environment or the platform default.
        """
        self._home = home

    @property
    def home(self) -> Path:
        """Installation root of the version manager."""
        if self._home is not None:
            return self._home
        return self.default_home()

    @property
    @abstractmethod
    def platform(self) -> Platform:
        """Return the platform this adapter targets."""

    @abstractmethod
    def default_home(self) -> Path:
        """Resolve the installation root from the environment or platform default."""

    @property
    @abstractmethod
    def versions_dir(self) -> Path:
        """Directory holding one subdirectory per installed runtime."""

    @property
    @abstractmethod
    def settings_path(self) -> Path:
        """Manager bookkeeping an operator may need to edit by hand."""

    @property
    @abstractmethod
    def list_args(self) -> list[str]:
        """Arguments of the installed-versions listing command."""

    @property
    @abstractmethod
    def remote_args(self) -> list[str]:
        """Arguments of the available/remote listing command."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the version manager can be used on this system."""

    @abstractmethod
    def run(self, args: list[str]) -> CommandResult:
        """Run a version manager subcommand.

        Args:
            args: Subcommand and its arguments, e.g. ``["use", "20.11.0"]``.

        Returns:
            CommandResult of the invocation.

        Raises:
            FileNotFoundError: If the manager or its shell is missing.
        """

    @abstractmethod
    def run_in_version(self, version: str, args: list[str]) -> CommandResult:
        """Run an arbitrary command with the given runtime version active.

        Args:
            version: Runtime version to activate for the command.
            args: Command and arguments, e.g. ``["npm", "ls", "-g"]``.

        Returns:
            CommandResult of the command.

        Raises:
            FileNotFoundError: If the manager or its shell is missing.
        """

    @abstractmethod
    def parse_latest_stable(self, output: str) -> str | None:
        """Extract the latest stable release from the remote listing output."""

    def use(self, version: str) -> CommandResult:
        """Make a version the active runtime."""
        return self.run(["use", version])

    def install(self, version: str) -> CommandResult:
        """Install a runtime version."""
        return self.run(["install", version])

    def uninstall(self, version: str) -> CommandResult:
        """Uninstall a runtime version."""
        return self.run(["uninstall", version])

    @abstractmethod
    def deactivate(self) -> CommandResult:
        """Leave no managed runtime active."""

    def current(self) -> str | None:
        """Return the active runtime version, or None if none is active.

        Raises:
            ManagerError: If the manager failed to report the active version.
        """
        result = self.run(["current"])
        if not result.success:
            raise ManagerError(f"nvm current failed: {result.error_message}")
        return parse_current(result.stdout)

    def active_marker(self) -> str | None:
        """Capture what is active now, in the form ``restore_active`` accepts."""
        return self.current()

    def restore_active(self, marker: str | None) -> CommandResult:
        """Return to a state captured by ``active_marker``.

        Args:
            marker: Captured state. None means no runtime was active.
        """
        if marker is None:
            return self.deactivate()
        return self.use(marker)

    def list_versions(self) -> CommandResult:
        """Run the installed-versions listing command."""
        return self.run(self.list_args)

    def list_remote(self) -> CommandResult:
        """Run the available/remote listing command."""
        return self.run(self.remote_args)

    def version_dir_candidates(self, version: str) -> list[Path]:
        """Possible on-disk locations of a version, tagged name first."""
        return [self.versions_dir / f"v{version}", self.versions_dir / version]

    def context(self, version: str) -> "RuntimeContext":
        """Bind a runtime version to this manager for command execution."""
        return RuntimeContext(version=version, manager=self)


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    """An explicit handle on a runtime version.

    Package manager calls are executed through a context instead of relying
    on whichever version happens to be active in the process.

    Attributes:
        version: Runtime version commands run under.
        manager: Adapter used to activate the version.
    """

    version: str
    manager: VersionManager

    def run(self, args: list[str]) -> CommandResult:
        """Run a command with this context's version active."""
        return self.manager.run_in_version(self.version, args)
