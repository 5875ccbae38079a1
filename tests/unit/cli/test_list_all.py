"""Unit tests for the list-all command."""

import json
from collections.abc import Iterator
from unittest.mock import patch

import pytest
from fakes import FakeManager
from nvmctl.cli.commands.list_all import select_versions
from nvmctl.cli.main import app
from nvmctl.cli.types import Toolkit
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def versions(fake_manager: FakeManager, toolkit: Toolkit) -> Iterator[FakeManager]:
    """Two runtimes with packages; 20.11.0 active; toolkit patched in."""
    fake_manager.add_version("18.20.0", {"eslint": "8.57.0", "prettier": "3.2.5"})
    fake_manager.add_version("20.11.0", {"prettier": "3.2.5"})
    fake_manager.active = "20.11.0"
    with patch("nvmctl.cli.commands.list_all.build_toolkit", return_value=toolkit):
        yield fake_manager


class TestSelectVersions:
    """Tests for resolving --versions."""

    def test_all(self) -> None:
        """None and 'all' select every installed version."""
        assert select_versions(None, ["18.20.0", "20.11.0"]) == ["18.20.0", "20.11.0"]
        assert select_versions(" ALL ", ["18.20.0"]) == ["18.20.0"]

    def test_subset_normalized(self) -> None:
        """Listed versions are normalized and kept in the given order."""
        assert select_versions("v20.11.0, 18.20.0", ["18.20.0", "20.11.0"]) == [
            "20.11.0",
            "18.20.0",
        ]

    def test_invalid(self) -> None:
        """Versions that are not installed are rejected by name."""
        with pytest.raises(ValueError, match="16.20.2, lts"):
            select_versions("16.20.2,lts,18.20.0", ["18.20.0"])


class TestListAllCommand:
    """Tests for running list-all."""

    def test_help(self) -> None:
        """list-all shows its options."""
        result = runner.invoke(app, ["list-all", "--help"])
        assert result.exit_code == 0
        assert "--json" in result.stdout
        assert "--versions" in result.stdout

    def test_writes_ledger(self, versions: FakeManager, toolkit: Toolkit) -> None:
        """Every version is recorded and the active version is restored."""
        result = runner.invoke(app, ["list-all"])

        assert result.exit_code == 0
        assert "eslint" in result.stdout
        assert "saved to" in result.stdout
        assert toolkit.ledger.path.read_text() == (
            "Node Version: 18.20.0\neslint, prettier\n\n"
            "Node Version: 20.11.0\nprettier\n\n"
        )
        assert toolkit.ledger.read() == ["eslint", "prettier"]
        assert versions.active == "20.11.0"

    def test_json(self, versions: FakeManager) -> None:
        """--json prints only the JSON document on stdout."""
        result = runner.invoke(app, ["list-all", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"version": "18.20.0", "packages": ["eslint", "prettier"]},
            {"version": "20.11.0", "packages": ["prettier"]},
        ]

    def test_selected_versions(self, versions: FakeManager, toolkit: Toolkit) -> None:
        """--versions limits the versions inspected."""
        result = runner.invoke(app, ["list-all", "--versions", "18.20.0"])

        assert result.exit_code == 0
        assert "20.11.0" not in toolkit.ledger.path.read_text()

    def test_invalid_versions(self, versions: FakeManager, toolkit: Toolkit) -> None:
        """Unknown versions abort with the installed list and no ledger."""
        result = runner.invoke(app, ["list-all", "--versions", "16.20.2"])

        assert result.exit_code == 1
        assert "Invalid version" in result.output
        assert "18.20.0, 20.11.0" in result.output
        assert not toolkit.ledger.exists()

    def test_skips_unusable_version(self, versions: FakeManager, toolkit: Toolkit) -> None:
        """A version that cannot be activated is skipped with a warning."""
        versions.failing.add("use 18.20.0")

        result = runner.invoke(app, ["list-all"])

        assert result.exit_code == 0
        assert "skipping" in result.output
        assert toolkit.ledger.path.read_text() == "Node Version: 20.11.0\nprettier\n\n"

    def test_no_versions(self, toolkit: Toolkit) -> None:
        """Without runtimes nothing is written."""
        with patch("nvmctl.cli.commands.list_all.build_toolkit", return_value=toolkit):
            result = runner.invoke(app, ["list-all"])

        assert result.exit_code == 0
        assert "No Node.js versions" in result.output
        assert not toolkit.ledger.exists()

    def test_extract_alias(self, versions: FakeManager, toolkit: Toolkit) -> None:
        """extract is a hidden alias of list-all."""
        result = runner.invoke(app, ["extract"])

        assert result.exit_code == 0
        assert toolkit.ledger.exists()

    def test_nothing_active_stays_inactive(self, versions: FakeManager) -> None:
        """With no version active beforehand, none is left active afterwards."""
        versions.active = None

        result = runner.invoke(app, ["list-all"])

        assert result.exit_code == 0
        assert versions.active is None
        assert ["unalias", "default"] in versions.calls
