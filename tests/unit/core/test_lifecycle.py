"""Unit tests for runtime lifecycle operations and phantom repair."""

from unittest.mock import patch

from fakes import FakeManager
from nvmctl.cli.types import Toolkit
from nvmctl.core.lifecycle import RepairOutcome


def _never(version: str) -> bool:
    raise AssertionError(f"should not ask about {version}")


class TestBasicOperations:
    """Tests for install, activate and uninstall."""

    def test_install_and_activate(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """Installed versions can be activated."""
        assert toolkit.lifecycle.install("20.11.0")
        assert toolkit.lifecycle.activate("20.11.0")
        assert fake_manager.active == "20.11.0"

    def test_activate_missing_version(self, toolkit: Toolkit) -> None:
        """Activating a version that is not installed fails."""
        assert not toolkit.lifecycle.activate("99.0.0")

    def test_manager_not_runnable(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """OS errors become a plain failure."""
        with patch.object(fake_manager, "install", side_effect=FileNotFoundError("bash")):
            assert not toolkit.lifecycle.install("20.11.0")


class TestUninstallVerified:
    """Tests for uninstall with listing verification."""

    def test_removed(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """A clean uninstall succeeds."""
        fake_manager.add_version("16.20.2")

        result = toolkit.lifecycle.uninstall_verified("16.20.2")

        assert result.success
        assert result.target == "16.20.2"

    def test_still_listed(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """Reported success with the version still listed is a failure."""
        fake_manager.add_version("16.20.2")
        fake_manager.stuck.add("16.20.2")

        result = toolkit.lifecycle.uninstall_verified("16.20.2")

        assert result.failed
        assert result.error == "Still listed after uninstall"

    def test_uninstall_fails(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """A failing uninstall is reported as such."""
        fake_manager.add_version("16.20.2")
        fake_manager.failing.add("uninstall 16.20.2")

        result = toolkit.lifecycle.uninstall_verified("16.20.2")

        assert result.error == "Uninstall failed"


class TestForceRemove:
    """Tests for deleting a version folder directly."""

    def test_prefers_tagged_folder(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """vX.Y.Z is found before X.Y.Z."""
        fake_manager.add_version("16.20.2")
        (fake_manager.versions_dir / "16.20.2").mkdir()

        removal = toolkit.lifecycle.force_remove("16.20.2")

        assert removal.removed
        assert removal.path == fake_manager.versions_dir / "v16.20.2"
        assert (fake_manager.versions_dir / "16.20.2").exists()

    def test_no_folder(self, toolkit: Toolkit) -> None:
        """Nothing to delete is reported with no path."""
        removal = toolkit.lifecycle.force_remove("16.20.2")
        assert removal.path is None
        assert not removal.removed

    def test_delete_error(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """Deletion errors are captured."""
        fake_manager.add_version("16.20.2")
        with patch("nvmctl.core.lifecycle.shutil.rmtree", side_effect=PermissionError("busy")):
            removal = toolkit.lifecycle.force_remove("16.20.2")

        assert not removal.removed
        assert removal.error == "busy"


class TestRepair:
    """Tests for the repair state machine."""

    def test_clean_uninstall_no_prompt(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """A version that uninstalls cleanly is never offered for deletion."""
        fake_manager.add_version("16.20.2")

        report = toolkit.lifecycle.repair("16.20.2", confirm_removal=_never)

        assert report.outcome == RepairOutcome.UNINSTALLED
        assert not report.outcome.needs_operator

    def test_declined(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """Declining the deletion leaves the folder alone."""
        fake_manager.add_version("16.20.2")
        fake_manager.failing.add("uninstall 16.20.2")

        report = toolkit.lifecycle.repair("16.20.2", confirm_removal=lambda v: False)

        assert report.outcome == RepairOutcome.SKIPPED
        assert (fake_manager.versions_dir / "v16.20.2").exists()

    def test_force_removed(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """Deleting the folder of a failed uninstall clears the listing."""
        fake_manager.add_version("16.20.2")
        fake_manager.failing.add("uninstall 16.20.2")

        report = toolkit.lifecycle.repair("16.20.2", confirm_removal=lambda v: True)

        assert report.outcome == RepairOutcome.NO_LONGER_LISTED
        assert report.removal is not None and report.removal.removed

    def test_still_listed_after_delete(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """A listing that survives the deletion needs the operator."""
        fake_manager.add_version("16.20.2")
        fake_manager.stuck.add("16.20.2")

        report = toolkit.lifecycle.repair("16.20.2", confirm_removal=lambda v: True)

        assert report.outcome == RepairOutcome.STILL_LISTED_WARN
        assert report.outcome.needs_operator

    def test_metadata_phantom(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """Listed without a folder is stale metadata; settings are not touched."""
        fake_manager.phantoms.add("14.21.3")
        fake_manager.failing.add("uninstall 14.21.3")
        fake_manager.settings_path.parent.mkdir(parents=True, exist_ok=True)
        fake_manager.settings_path.write_text("default -> 14.21.3")

        report = toolkit.lifecycle.repair("14.21.3", confirm_removal=lambda v: True)

        assert report.outcome == RepairOutcome.METADATA_PHANTOM
        assert fake_manager.settings_path.read_text() == "default -> 14.21.3"

    def test_remove_failed(self, toolkit: Toolkit, fake_manager: FakeManager) -> None:
        """A folder that cannot be deleted is reported."""
        fake_manager.add_version("16.20.2")
        fake_manager.failing.add("uninstall 16.20.2")

        with patch("nvmctl.core.lifecycle.shutil.rmtree", side_effect=PermissionError("busy")):
            report = toolkit.lifecycle.repair("16.20.2", confirm_removal=lambda v: True)

        assert report.outcome == RepairOutcome.REMOVE_FAILED
