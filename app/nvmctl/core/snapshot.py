"""Package snapshot.

Reads the global package set of a runtime version and looks up single
packages on the registry. Every query runs under an explicit
RuntimeContext obtained from ``activated``, which restores whatever
version was active before on every exit path.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from nvmctl.core.lifecycle import VersionLifecycle
from nvmctl.managers.base import ManagerError, RuntimeContext, VersionManager
from nvmctl.models.runtime import GlobalPackage
from nvmctl.operators.npm import NpmError, NpmOperator

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description available."


class ActivationError(RuntimeError):
    """Raised when a runtime version cannot be activated."""


class PackageSnapshot:
    """Global package queries bound to explicit runtime contexts.

    Lookups degrade to None or an empty list on any failure; only
    ``activated`` raises, and only ActivationError.
    """

    def __init__(self, manager: VersionManager, lifecycle: VersionLifecycle) -> None:
        """Initialize the snapshot.

        Args:
            manager: Version manager adapter.
            lifecycle: Lifecycle operations used to switch versions.
        """
        self.manager = manager
        self.lifecycle = lifecycle

    @contextmanager
    def activated(self, version: str, *, restore: bool = True) -> Iterator[RuntimeContext]:
        """Activate a runtime version for the duration of a block.

        Whatever was active on entry is captured, including "nothing", and
        put back on exit, including on exceptions and early returns.

        Args:
            version: Version to activate.
            restore: If False, leave ``version`` active afterwards. Used when
                the caller means to keep working with it.

        Yields:
            RuntimeContext bound to ``version``.

        Raises:
            ActivationError: If ``version`` cannot be activated.
        """
        captured = False
        previous: str | None = None
        if restore:
            try:
                previous = self.manager.active_marker()
                captured = True
            except (OSError, ManagerError) as e:
                logger.warning("Could not read the active Node.js version: %s", e)

        if not self.lifecycle.activate(version):
            raise ActivationError(f"Failed to switch to Node.js version {version}")

        try:
            yield self.manager.context(version)
        finally:
            if captured and previous != version:
                self._restore(previous)

    def _restore(self, previous: str | None) -> None:
        label = previous or "no active version"
        try:
            result = self.manager.restore_active(previous)
        except OSError as e:
            logger.warning("Could not switch back to %s: %s", label, e)
            return
        if not result.success:
            logger.warning("Could not switch back to %s: %s", label, result.error_message)

    def global_packages_of_active(self, context: RuntimeContext) -> list[str]:
        """List global package names under a context, excluding npm."""
        return [package.name for package in self.installed_packages_of(context)]

    def installed_packages_of(self, context: RuntimeContext) -> list[GlobalPackage]:
        """List global packages with versions under a context, excluding npm.

        Returns:
            Packages, or an empty list if npm failed or printed garbage.
        """
        try:
            return NpmOperator(context).list_global()
        except NpmError as e:
            logger.warning("Could not list global packages for Node.js %s: %s", context.version, e)
            return []

    def global_packages_of(self, version: str, *, leave_active: bool = False) -> list[str]:
        """Activate a version and list its global package names.

        Args:
            version: Version to inspect.
            leave_active: If True, do not switch back afterwards.

        Returns:
            Package names, or an empty list if activation or listing failed.
        """
        return [p.name for p in self.packages_of(version, leave_active=leave_active)]

    def packages_of(self, version: str, *, leave_active: bool = False) -> list[GlobalPackage]:
        """Activate a version and list its global packages with versions.

        Returns:
            Packages, or an empty list if activation or listing failed.
        """
        try:
            with self.activated(version, restore=not leave_active) as context:
                return self.installed_packages_of(context)
        except ActivationError as e:
            logger.warning("%s", e)
            return []

    def installed_version_of(self, context: RuntimeContext, name: str) -> str | None:
        """Return the installed version of one global package, if any."""
        try:
            return NpmOperator(context).installed_version(name)
        except NpmError as e:
            logger.debug("Installed version lookup for %s failed: %s", name, e)
            return None

    def latest_registry_version_of(self, context: RuntimeContext, name: str) -> str | None:
        """Return the latest version published on the registry, if known."""
        try:
            return NpmOperator(context).view(name, "version")
        except NpmError as e:
            logger.debug("Registry version lookup for %s failed: %s", name, e)
            return None

    def description_of(self, context: RuntimeContext, name: str) -> str:
        """Return the registry description of a package."""
        try:
            description = NpmOperator(context).view(name, "description")
        except NpmError as e:
            logger.debug("Description lookup for %s failed: %s", name, e)
            return NO_DESCRIPTION
        return description or NO_DESCRIPTION
