"""Fix-failed command implementation.

Removes Node.js versions that the version manager still lists after a
failed or partial uninstall, deleting their folders directly when the
manager's own uninstall does not take.
"""

from typing import Annotated

import typer

from nvmctl.cli.prompts import confirm
from nvmctl.cli.types import build_toolkit
from nvmctl.core.lifecycle import RepairOutcome, RepairReport
from nvmctl.managers.base import VersionManager
from nvmctl.models.runtime import sort_versions
from nvmctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_muted,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Remove Node.js versions left behind by failed uninstalls.",
    invoke_without_command=True,
)


def _confirm_removal(version: str, yes: bool) -> bool:
    """Ask before deleting a version's folder directly."""
    print_warning(f"Uninstall failed or Node.js {version} is still listed.")
    print_muted("  Will attempt manual folder deletion.")
    if yes:
        return True
    return confirm(f"Manually delete the folder for Node.js {version}?", default=True)


def _print_report(report: RepairReport, manager: VersionManager) -> None:
    """Print the outcome of repairing one version."""
    version = report.version
    removal = report.removal

    if report.outcome == RepairOutcome.UNINSTALLED:
        print_success(f"Uninstalled Node.js version {version}")
    elif report.outcome == RepairOutcome.SKIPPED:
        print_muted(f"Skipped manual deletion for Node.js {version}.")
    elif report.outcome == RepairOutcome.NO_LONGER_LISTED:
        if removal is not None and removal.removed:
            print_success(f"Deleted {removal.path}")
        print_success(f"Node.js {version} is no longer listed.")
    elif report.outcome == RepairOutcome.STILL_LISTED_WARN:
        if removal is not None:
            print_success(f"Deleted {removal.path}")
        print_warning(f"Node.js {version} is still listed after deleting its folder.")
        print_info("Restart your shell and check 'nvm list' again.")
    elif report.outcome == RepairOutcome.REMOVE_FAILED:
        path = removal.path if removal is not None else version
        error = removal.error if removal is not None else "unknown error"
        print_error(f"Failed to delete {path}: {error}")
        print_info("Close any program using that Node.js version and delete the folder by hand.")
    elif report.outcome == RepairOutcome.METADATA_PHANTOM:
        print_warning(f"No folder found for Node.js {version}, but it is still listed.")
        print_info("To remove the stale entry:")
        console.print(f"  1. Open {manager.settings_path}")
        console.print(f"  2. Remove any reference to {version}")
        console.print("  3. Restart your shell and run 'nvm list' to confirm")


@app.callback(invoke_without_command=True)
def fix_failed(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Delete leftover folders without asking.",
        ),
    ] = False,
) -> None:
    """Remove Node.js versions left behind by failed uninstalls.

    Every listed version except the latest LTS is uninstalled through the
    version manager. When that fails or the version is still listed
    afterwards, its folder is deleted directly after confirmation. The
    manager's settings are never edited; stale entries without a folder
    are reported with instructions instead.
    """
    if ctx.invoked_subcommand is not None:
        return

    toolkit = build_toolkit()
    console.print("[bold]Cleaning up failed Node.js uninstalls[/]")

    latest = toolkit.inventory.latest_stable()
    if latest is None:
        print_error("Could not detect latest stable LTS version.")
        return
    print_success(f"Latest stable LTS version (will be preserved): {latest}")

    home = toolkit.manager.home
    if not home.is_dir():
        print_error(f"NVM directory not found: {home}")
        print_info("Set NVM_DIR (nvm) or NVM_HOME (nvm-windows), or nvm_dir in the config.")
        return
    print_info(f"Detected NVM directory: {home}")

    versions = sort_versions(
        list(set(toolkit.inventory.listed_versions()) | set(toolkit.inventory.list_installed()))
    )
    if not versions:
        print_warning("No Node.js versions found installed with nvm.")
        return

    reports: list[RepairReport] = []
    for version in versions:
        if version == latest:
            print_success(f"Skipping latest stable LTS version: {version}")
            continue

        console.print()
        print_info(f"Attempting to uninstall Node.js version {version}...")
        report = toolkit.lifecycle.repair(
            version,
            confirm_removal=lambda v: _confirm_removal(v, yes),
        )
        _print_report(report, toolkit.manager)
        reports.append(report)

    console.print()
    unresolved = [report.version for report in reports if report.outcome.needs_operator]
    if unresolved:
        print_warning(f"Manual follow-up needed for: {', '.join(unresolved)}")
    print_success("Cleanup of failed Node.js uninstalls complete.")
    print_info(f"Node.js {latest} remains installed.")
