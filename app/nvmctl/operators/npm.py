"""npm operator implementation.

Runs npm against one runtime version, always through an explicit
RuntimeContext so that the version a command sees never depends on what
an earlier call left active.
"""

import logging

from nvmctl.managers.base import RuntimeContext
from nvmctl.models.action import ActionResult, ActionType, Decision
from nvmctl.models.runtime import GlobalPackage
from nvmctl.parsers.npm import NpmOutputError, parse_global_listing, parse_view_field
from nvmctl.utils.shell import CommandResult

logger = logging.getLogger(__name__)


class NpmError(RuntimeError):
    """Raised when npm cannot be run or its output cannot be read."""


class NpmOperator:
    """Operator for global npm packages under one runtime version.

    Attributes:
        context: Runtime version the operator's commands run under.

    Example:
        >>> operator = NpmOperator(manager.context("20.11.0"))
        >>> [pkg.name for pkg in operator.list_global()]
        ['eslint', 'prettier']
    """

    def __init__(self, context: RuntimeContext) -> None:
        """Initialize the operator.

        Args:
            context: Runtime version to run npm under.
        """
        self.context = context

    def list_global(self) -> list[GlobalPackage]:
        """List top-level global packages, excluding npm itself.

        Returns:
            Installed global packages with their versions.

        Raises:
            NpmError: If npm is missing or prints an unreadable listing.
        """
        result = self._run(["npm", "ls", "-g", "--depth=0", "--json"])
        try:
            return parse_global_listing(result.stdout)
        except NpmOutputError as e:
            detail = result.stderr.strip()
            msg = f"{e} ({detail})" if detail else str(e)
            raise NpmError(msg) from e

    def installed_version(self, name: str) -> str | None:
        """Return the globally installed version of a package, if any.

        Raises:
            NpmError: If npm is missing or prints an unreadable listing.
        """
        result = self._run(["npm", "ls", "-g", name, "--depth=0", "--json"])
        try:
            packages = parse_global_listing(result.stdout)
        except NpmOutputError as e:
            raise NpmError(str(e)) from e
        for package in packages:
            if package.name == name:
                return package.version
        return None

    def view(self, name: str, field: str) -> str | None:
        """Read one registry field of a package, e.g. ``version``.

        Returns:
            The field value, or None if the registry has no such package.

        Raises:
            NpmError: If npm is missing.
        """
        result = self._run(["npm", "view", name, field])
        if not result.success:
            logger.debug("npm view %s %s failed: %s", name, field, result.error_message)
            return None
        return parse_view_field(result.stdout)

    def install(self, name: str) -> ActionResult:
        """Install (or update) a package globally.

        Failures are reported in the result, not raised.

        Args:
            name: Package name, optionally with an ``@version`` suffix.

        Returns:
            ActionResult for the package.
        """
        logger.info("Installing %s globally under Node.js %s", name, self.context.version)
        try:
            result = self.context.run(["npm", "install", "-g", name])
        except OSError as e:
            return _install_failure(name, str(e))

        if not result.success:
            return _install_failure(name, result.error_message)

        return ActionResult(
            action_type=ActionType.INSTALL,
            target=name,
            decision=Decision.PROCEED,
            success=True,
            message=f"Installed under Node.js {self.context.version}",
        )

    def _run(self, args: list[str]) -> CommandResult:
        """Run npm in the operator's context, mapping OS errors to NpmError."""
        try:
            return self.context.run(args)
        except OSError as e:
            msg = f"Failed to run {' '.join(args)}: {e}"
            raise NpmError(msg) from e


def _install_failure(name: str, error: str) -> ActionResult:
    """Build the failure result for an install."""
    return ActionResult(
        action_type=ActionType.INSTALL,
        target=name,
        decision=Decision.PROCEED,
        success=False,
        error=error,
    )
