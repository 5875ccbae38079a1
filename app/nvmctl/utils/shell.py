"""Subprocess helpers.

Every call to nvm, nvm-windows or npm goes through :func:`run_command`,
which captures both streams as text and never raises on a non-zero exit.
"""

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of one external command.

    Attributes:
        stdout: Standard output, empty if the command printed nothing.
        stderr: Standard error, empty if the command printed nothing.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Whether the command exited with code 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Both streams joined, for tools that report errors on either."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)

    @property
    def error_message(self) -> str:
        """Best available human-readable failure description."""
        return self.stderr.strip() or self.stdout.strip() or f"exit code {self.returncode}"


def run_command(
    args: list[str],
    *,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run a command to completion and capture its output.

    Installs and uninstalls can take minutes, so no timeout applies unless
    one is given.

    Args:
        args: Command and arguments.
        timeout: Seconds to wait before giving up.
        env: Variables added on top of the current environment.

    Returns:
        CommandResult with both streams and the exit code.

    Raises:
        FileNotFoundError: If the executable does not exist.
        subprocess.TimeoutExpired: If the timeout elapses.
    """
    logger.debug("Running: %s", shlex.join(args))
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        env={**os.environ, **env} if env else None,
    )
    logger.debug("Exit code %d from %s", completed.returncode, args[0])
    return CommandResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        returncode=completed.returncode,
    )


def command_exists(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None
