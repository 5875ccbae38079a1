"""Unit tests for package snapshots and scoped activation."""

import pytest
from fakes import FakeManager
from nvmctl.cli.types import Toolkit
from nvmctl.core.snapshot import NO_DESCRIPTION, ActivationError
from nvmctl.models.runtime import GlobalPackage


@pytest.fixture
def two_versions(fake_manager: FakeManager) -> FakeManager:
    """18.20.0 with eslint and prettier, 20.11.0 with prettier, 20.11.0 active."""
    fake_manager.add_version("18.20.0", {"eslint": "8.57.0", "prettier": "3.2.5"})
    fake_manager.add_version("20.11.0", {"prettier": "3.2.5"})
    fake_manager.active = "20.11.0"
    return fake_manager


class TestActivated:
    """Tests for the activation scope."""

    def test_restores_previous(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """The version active before the block is active again afterwards."""
        with toolkit.snapshot.activated("18.20.0") as context:
            assert context.version == "18.20.0"
            assert two_versions.active == "18.20.0"

        assert two_versions.active == "20.11.0"

    def test_restores_on_error(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """An exception inside the block still restores the previous version."""
        with pytest.raises(RuntimeError), toolkit.snapshot.activated("18.20.0"):
            raise RuntimeError("npm exploded")

        assert two_versions.active == "20.11.0"

    def test_leave_active(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """restore=False keeps the new version active."""
        with toolkit.snapshot.activated("18.20.0", restore=False):
            pass

        assert two_versions.active == "18.20.0"

    def test_restores_nothing_active(
        self, toolkit: Toolkit, two_versions: FakeManager
    ) -> None:
        """When no version was active on entry, none is active afterwards."""
        two_versions.active = None

        with toolkit.snapshot.activated("18.20.0"):
            assert two_versions.active == "18.20.0"

        assert two_versions.active is None

    def test_unknown_entry_state_not_restored(
        self, toolkit: Toolkit, two_versions: FakeManager
    ) -> None:
        """If the entry state cannot be read, nothing is guessed on exit."""
        two_versions.failing.add("current")

        with toolkit.snapshot.activated("18.20.0"):
            pass

        assert two_versions.active == "18.20.0"
        assert ["unalias", "default"] not in two_versions.calls

    def test_activation_fails(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """A version that cannot be activated raises ActivationError."""
        with pytest.raises(ActivationError, match="99.0.0"), toolkit.snapshot.activated("99.0.0"):
            pass

        assert two_versions.active == "20.11.0"


class TestPackageQueries:
    """Tests for global package lookups."""

    def test_global_packages_of(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """Packages are read under the requested version only."""
        assert toolkit.snapshot.global_packages_of("18.20.0") == ["eslint", "prettier"]
        assert toolkit.snapshot.global_packages_of("20.11.0") == ["prettier"]
        assert two_versions.active == "20.11.0"

    def test_npm_calls_bound_to_version(
        self, toolkit: Toolkit, two_versions: FakeManager
    ) -> None:
        """npm runs under the context's version, not the active one."""
        toolkit.snapshot.global_packages_of("18.20.0")

        npm_calls = [call for call in two_versions.calls if call[0].startswith("@")]
        assert npm_calls == [["@18.20.0", "npm", "ls", "-g", "--depth=0", "--json"]]

    def test_packages_with_versions(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """packages_of keeps the installed versions."""
        assert toolkit.snapshot.packages_of("18.20.0") == [
            GlobalPackage(name="eslint", version="8.57.0"),
            GlobalPackage(name="prettier", version="3.2.5"),
        ]

    def test_activation_failure_is_empty(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """A version that cannot be activated has no packages."""
        two_versions.failing.add("use 18.20.0")
        assert toolkit.snapshot.global_packages_of("18.20.0") == []

    def test_npm_failure_is_empty(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """Unreadable npm output gives an empty list."""
        two_versions.failing.add("npm ls -g --depth=0 --json")
        assert toolkit.snapshot.global_packages_of("18.20.0") == []

    def test_registry_lookups(self, toolkit: Toolkit, two_versions: FakeManager) -> None:
        """Installed, latest and description lookups degrade to None/default."""
        two_versions.registry["prettier"] = "3.3.0"
        two_versions.descriptions["prettier"] = "Prettier is an opinionated code formatter"
        context = two_versions.context("20.11.0")

        assert toolkit.snapshot.installed_version_of(context, "prettier") == "3.2.5"
        assert toolkit.snapshot.installed_version_of(context, "eslint") is None
        assert toolkit.snapshot.latest_registry_version_of(context, "prettier") == "3.3.0"
        assert toolkit.snapshot.latest_registry_version_of(context, "nope") is None
        assert toolkit.snapshot.description_of(context, "prettier").startswith("Prettier")
        assert toolkit.snapshot.description_of(context, "nope") == NO_DESCRIPTION
