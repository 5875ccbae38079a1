"""Cleanup command implementation.

Uninstalls every Node.js version except the latest stable LTS release,
asking per version.
"""

from typing import Annotated

import typer

from nvmctl.cli.display import create_results_table, print_results_summary, print_versions
from nvmctl.cli.prompts import UNINSTALL_LABELS, ask_choice
from nvmctl.cli.types import build_toolkit
from nvmctl.core.policy import Choice, Policy, decide
from nvmctl.models.action import ActionResult, ActionType, Decision, skipped_result
from nvmctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_muted,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Uninstall all Node.js versions except the latest LTS.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def cleanup(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Uninstall every other version without asking.",
        ),
    ] = False,
) -> None:
    """Uninstall all Node.js versions except the latest LTS.

    The latest LTS release is activated first so that no version being
    removed is in use. Each other version is then offered for removal:
    answer y or n for that version, y-all or n-all for every remaining one.

    Versions that the manager still lists after uninstalling can be cleaned
    up with fix-failed.
    """
    if ctx.invoked_subcommand is not None:
        return

    toolkit = build_toolkit()
    console.print("[bold]Removing Node.js versions except the latest LTS[/]")

    latest = toolkit.inventory.latest_stable()
    if latest is None:
        print_error("Could not detect latest stable LTS version.")
        return
    print_success(f"Latest stable LTS version (will be preserved): {latest}")

    installed = toolkit.inventory.list_installed()
    if not installed:
        print_warning("No Node.js versions found installed with nvm.")
        return
    if latest not in installed:
        print_error(f"Node.js {latest} is not installed; refusing to remove the others.")
        print_info("Run 'nvmctl install-lts' first.")
        return

    if not toolkit.lifecycle.activate(latest):
        print_warning(f"Failed to switch to Node.js {latest}, continuing anyway.")

    to_uninstall = [version for version in installed if version != latest]
    if not to_uninstall:
        print_success("No Node.js versions to uninstall (only the latest LTS is installed).")
        return

    print_versions("Node.js versions available for uninstallation:", to_uninstall)

    policy = Policy.PROCEED_ALL if yes else Policy.ASK_EACH
    results: list[ActionResult] = []
    for version in to_uninstall:
        decision, policy = decide(
            policy,
            lambda: ask_choice(  # noqa: B023
                f"Uninstall Node.js {version}?", UNINSTALL_LABELS, Choice.NO
            ),
        )
        if decision == Decision.SKIP:
            print_muted(f"Skipping Node.js version {version}.")
            results.append(skipped_result(ActionType.UNINSTALL, version))
            continue

        print_info(f"Uninstalling Node.js version {version}...")
        result = toolkit.lifecycle.uninstall_verified(version)
        if result.success:
            print_success(f"Uninstalled Node.js version {version}")
        else:
            print_error(f"Failed to uninstall Node.js version {version}: {result.error}")
        results.append(result)

    console.print()
    console.print(create_results_table(results))
    print_results_summary(results)

    if any(result.failed for result in results):
        print_info("Run 'nvmctl fix-failed' to remove versions that are still listed.")

    print_success(f"Cleanup complete. Node.js {latest} remains installed.")
