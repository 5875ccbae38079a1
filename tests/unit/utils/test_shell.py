"""Unit tests for shell execution utilities."""

from unittest.mock import MagicMock, patch

import pytest
from nvmctl.utils.shell import CommandResult, command_exists, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Exit code 0 is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success
        assert not CommandResult(stdout="", stderr="", returncode=3).success

    def test_output_joins_streams(self) -> None:
        """output holds both streams, skipping empty ones."""
        assert CommandResult(stdout="a", stderr="b", returncode=0).output == "a\nb"
        assert CommandResult(stdout="", stderr="b", returncode=0).output == "b"

    def test_error_message_prefers_stderr(self) -> None:
        """stderr is the preferred failure description."""
        result = CommandResult(stdout="out", stderr=" err \n", returncode=1)
        assert result.error_message == "err"

    def test_error_message_fallbacks(self) -> None:
        """stdout, then the exit code, describe a silent failure."""
        assert CommandResult(stdout="out", stderr="", returncode=1).error_message == "out"
        assert CommandResult(stdout="", stderr="", returncode=2).error_message == "exit code 2"


class TestRunCommand:
    """Tests for run_command."""

    @patch("nvmctl.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """Output and exit code are captured as text."""
        mock_run.return_value = MagicMock(stdout="v20.11.0\n", stderr="", returncode=0)

        result = run_command(["node", "--version"])

        assert result == CommandResult(stdout="v20.11.0\n", stderr="", returncode=0)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["text"] is True

    @patch("nvmctl.utils.shell.subprocess.run")
    def test_no_timeout_by_default(self, mock_run: MagicMock) -> None:
        """Long installs are never cut short."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["nvm", "install", "20.11.0"])

        assert mock_run.call_args.kwargs["timeout"] is None

    @patch("nvmctl.utils.shell.subprocess.run")
    def test_merges_env(self, mock_run: MagicMock) -> None:
        """Custom env is merged with the current environment."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        run_command(["bash", "-c", "true"], env={"NVM_DIR": "/opt/nvm"})

        call_env = mock_run.call_args.kwargs["env"]
        assert call_env["NVM_DIR"] == "/opt/nvm"
        assert "PATH" in call_env

    @patch("nvmctl.utils.shell.subprocess.run")
    def test_no_env_inherits(self, mock_run: MagicMock) -> None:
        """Without env the child inherits the environment unchanged."""
        mock_run.return_value = MagicMock(stdout=None, stderr=None, returncode=0)

        result = run_command(["true"])

        assert mock_run.call_args.kwargs["env"] is None
        assert result.stdout == ""

    def test_raises_file_not_found(self) -> None:
        """A missing executable raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            run_command(["nvmctl-definitely-not-a-command"])


class TestCommandExists:
    """Tests for command_exists."""

    @patch("nvmctl.utils.shell.shutil.which", return_value="/usr/bin/bash")
    def test_found(self, _mock_which: MagicMock) -> None:
        """A command on PATH exists."""
        assert command_exists("bash")

    @patch("nvmctl.utils.shell.shutil.which", return_value=None)
    def test_missing(self, _mock_which: MagicMock) -> None:
        """A command not on PATH does not exist."""
        assert not command_exists("nvm")
