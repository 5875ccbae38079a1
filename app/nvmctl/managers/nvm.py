"""Unix nvm adapter.

nvm is a shell function rather than a binary, so every invocation sources
``$NVM_DIR/nvm.sh`` in a fresh bash process.
"""

import logging
import os
import shlex
from pathlib import Path

from nvmctl.managers.base import VersionManager
from nvmctl.models.runtime import Platform
from nvmctl.parsers.nvm import parse_unix_remote_lts
from nvmctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class NvmManager(VersionManager):
    """Adapter for nvm-sh on Linux and macOS.

    Runtimes live in ``$NVM_DIR/versions/node/vX.Y.Z``. Because each
    subprocess starts a new shell, the persistent "active" version is the
    ``default`` alias, which is what ``use`` updates.
    """

    @property
    def platform(self) -> Platform:
        """Return UNIX as the platform."""
        return Platform.UNIX

    def default_home(self) -> Path:
        """Resolve ``$NVM_DIR``, falling back to ``~/.nvm``."""
        nvm_dir = os.environ.get("NVM_DIR")
        if nvm_dir:
            return Path(nvm_dir)
        return Path.home() / ".nvm"

    @property
    def versions_dir(self) -> Path:
        """Return ``$NVM_DIR/versions/node``."""
        return self.home / "versions" / "node"

    @property
    def settings_path(self) -> Path:
        """Return the alias directory where nvm records default versions."""
        return self.home / "alias"

    @property
    def script_path(self) -> Path:
        """Return the path of ``nvm.sh``."""
        return self.home / "nvm.sh"

    @property
    def list_args(self) -> list[str]:
        """List installed versions only, without alias lines."""
        return ["ls", "--no-colors", "--no-alias"]

    @property
    def remote_args(self) -> list[str]:
        """List remote LTS releases."""
        return ["ls-remote", "--lts", "--no-colors"]

    def is_available(self) -> bool:
        """Check if nvm.sh exists and bash is on PATH."""
        return self.script_path.is_file() and command_exists("bash")

    def run(self, args: list[str]) -> CommandResult:
        """Run ``nvm <args>`` in a bash process with nvm sourced."""
        return self._run_script(f"nvm {shlex.join(args)}")

    def run_in_version(self, version: str, args: list[str]) -> CommandResult:
        """Run a command after ``nvm use`` in the same bash process."""
        body = f"nvm use --silent {shlex.quote(version)} >/dev/null && {shlex.join(args)}"
        return self._run_script(body)

    def use(self, version: str) -> CommandResult:
        """Activate a version and make it the default for new shells."""
        quoted = shlex.quote(version)
        return self._run_script(
            f"nvm use --silent {quoted} >/dev/null && nvm alias default {quoted}"
        )

    def deactivate(self) -> CommandResult:
        """Drop the ``default`` alias so new shells start without nvm's node."""
        return self.run(["unalias", "default"])

    def active_marker(self) -> str | None:
        """Return the raw ``default`` alias, or None if none is set.

        The alias is what every new shell activates, and may be ``system``,
        ``lts/*`` or a partial version rather than an installed release.
        """
        try:
            marker = (self.settings_path / "default").read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return marker or None

    def restore_active(self, marker: str | None) -> CommandResult:
        """Point the ``default`` alias back at a captured value."""
        if marker is None:
            return self.deactivate()
        return self.run(["alias", "default", marker])

    def parse_latest_stable(self, output: str) -> str | None:
        """Parse ``nvm ls-remote --lts`` output."""
        return parse_unix_remote_lts(output)

    def _run_script(self, body: str) -> CommandResult:
        """Execute a bash snippet with NVM_DIR exported and nvm.sh sourced.

        Args:
            body: Shell code to run after sourcing.

        Returns:
            CommandResult of the bash process.
        """
        script = f'. "$NVM_DIR/nvm.sh" && {body}'
        logger.debug("Running nvm script: %s", body)
        return run_command(["bash", "-c", script], env={"NVM_DIR": str(self.home)})
