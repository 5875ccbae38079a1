"""nvm-windows adapter."""

import logging
import os
import subprocess
from pathlib import Path

from nvmctl.managers.base import VersionManager
from nvmctl.models.runtime import Platform
from nvmctl.parsers.nvm import parse_windows_available, windows_reported_error
from nvmctl.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)


class NvmWindowsManager(VersionManager):
    """Adapter for nvm-windows (``nvm.exe``).

    Runtimes live directly under ``%NVM_HOME%`` as ``vX.Y.Z`` folders and
    ``nvm use`` switches a system-wide symlink.
    """

    @property
    def platform(self) -> Platform:
        """Return WINDOWS as the platform."""
        return Platform.WINDOWS

    def default_home(self) -> Path:
        """Resolve ``%NVM_HOME%``, falling back to ``~/AppData/Roaming/nvm``."""
        nvm_home = os.environ.get("NVM_HOME")
        if nvm_home:
            return Path(nvm_home)
        return Path.home() / "AppData" / "Roaming" / "nvm"

    @property
    def versions_dir(self) -> Path:
        """Versions sit directly in the installation root."""
        return self.home

    @property
    def settings_path(self) -> Path:
        """Return the nvm-windows ``settings.txt``."""
        return self.home / "settings.txt"

    @property
    def list_args(self) -> list[str]:
        """List installed versions."""
        return ["list"]

    @property
    def remote_args(self) -> list[str]:
        """List available releases as a table."""
        return ["list", "available"]

    def is_available(self) -> bool:
        """Check if nvm.exe is on PATH."""
        return command_exists("nvm")

    def run(self, args: list[str]) -> CommandResult:
        """Run ``nvm <args>``, treating reported errors as failures.

        nvm-windows often exits 0 after printing an error, so the output is
        inspected and a non-zero code substituted when it reports one.
        """
        logger.debug("Running nvm %s", " ".join(args))
        result = run_command(["nvm", *args])
        if result.success and windows_reported_error(result.output):
            logger.debug("nvm reported an error with exit code 0: %s", result.output.strip())
            return CommandResult(stdout=result.stdout, stderr=result.stderr, returncode=1)
        return result

    def run_in_version(self, version: str, args: list[str]) -> CommandResult:
        """Run a command through cmd after switching to the version.

        cmd resolves ``npm`` to ``npm.cmd``, which a direct CreateProcess
        call would not.
        """
        command_line = f"nvm use {version} >NUL && {subprocess.list2cmdline(args)}"
        logger.debug("Running under Node.js %s: %s", version, command_line)
        return run_command(["cmd", "/c", command_line])

    def deactivate(self) -> CommandResult:
        """Remove the node symlink with ``nvm off``."""
        return self.run(["off"])

    def parse_latest_stable(self, output: str) -> str | None:
        """Parse the ``nvm list available`` table."""
        return parse_windows_available(output)
