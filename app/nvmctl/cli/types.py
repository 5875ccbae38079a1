"""Shared types and utilities for CLI commands.

This module wires the configured version manager to the inventory,
snapshot, lifecycle, ledger, and reconciliation components that every
command works with.
"""

from dataclasses import dataclass
from pathlib import Path

import typer

from nvmctl.core.config import ConfigError, NvmctlConfig, load_config_or_default
from nvmctl.core.inventory import RuntimeInventory
from nvmctl.core.ledger import PackageLedger
from nvmctl.core.lifecycle import VersionLifecycle
from nvmctl.core.reconcile import ReconciliationEngine
from nvmctl.core.snapshot import PackageSnapshot
from nvmctl.managers import get_manager
from nvmctl.managers.base import VersionManager
from nvmctl.utils.formatting import print_error


@dataclass(frozen=True, slots=True)
class Toolkit:
    """Components a command needs, all bound to one version manager."""

    manager: VersionManager
    inventory: RuntimeInventory
    lifecycle: VersionLifecycle
    snapshot: PackageSnapshot
    ledger: PackageLedger
    engine: ReconciliationEngine

    @classmethod
    def from_manager(cls, manager: VersionManager, ledger_path: Path) -> "Toolkit":
        """Build every component around a version manager adapter.

        Args:
            manager: Version manager adapter.
            ledger_path: Location of the package ledger.

        Returns:
            Toolkit with all components wired together.
        """
        inventory = RuntimeInventory(manager)
        lifecycle = VersionLifecycle(manager, inventory)
        snapshot = PackageSnapshot(manager, lifecycle)
        return cls(
            manager=manager,
            inventory=inventory,
            lifecycle=lifecycle,
            snapshot=snapshot,
            ledger=PackageLedger(ledger_path),
            engine=ReconciliationEngine(snapshot),
        )


def load_settings() -> NvmctlConfig:
    """Load the user configuration, exiting with an error if it is invalid.

    Raises:
        typer.Exit: If a config file exists but cannot be used.
    """
    try:
        return load_config_or_default()
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e


def build_toolkit(config: NvmctlConfig | None = None) -> Toolkit:
    """Create the toolkit for the configured platform.

    Args:
        config: Configuration to use. If None, loaded from disk.

    Returns:
        Toolkit bound to the nvm or nvm-windows adapter.
    """
    config = config or load_settings()
    manager = get_manager(config.effective_platform, config.nvm_dir)
    return Toolkit.from_manager(manager, config.ledger_file)
