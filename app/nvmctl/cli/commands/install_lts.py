"""Install-lts command implementation.

Installs the latest LTS release of Node.js and restores the global
packages recorded in the package ledger onto it.
"""

from typing import Annotated

import typer

from nvmctl.cli.display import create_plan_table, print_results_summary, print_versions
from nvmctl.cli.flows import run_plan
from nvmctl.cli.prompts import confirm
from nvmctl.cli.types import build_toolkit
from nvmctl.core.policy import Policy
from nvmctl.core.snapshot import ActivationError
from nvmctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Install the latest LTS Node.js and restore global packages.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def install_lts(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Install everything without asking.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be installed without making changes.",
        ),
    ] = False,
) -> None:
    """Install the latest LTS Node.js and restore global packages.

    Reads the package list written by list-all, installs the latest LTS
    release if it is missing, and installs every listed package that is
    missing or outdated there. The latest LTS release stays active.

    Examples:
        nvmctl install-lts --dry-run    # Preview
        nvmctl install-lts --yes        # Install without prompts
    """
    if ctx.invoked_subcommand is not None:
        return

    toolkit = build_toolkit()
    console.print("[bold]Installing latest LTS Node.js and global packages[/]")

    if not toolkit.ledger.exists():
        print_error(f"Package list file '{toolkit.ledger.path}' not found.")
        print_info("Run 'nvmctl list-all' first to create the package list.")
        return

    packages = toolkit.ledger.read()
    if not packages:
        print_warning("No global packages found in the package list.")
        return
    print_info(f"{len(packages)} package(s) in {toolkit.ledger.path}")

    latest = toolkit.inventory.latest_stable()
    if latest is None:
        print_error("Could not detect latest stable LTS version.")
        return

    installed = toolkit.inventory.list_installed()
    print_success(f"Latest stable Node.js LTS: {latest}")
    print_versions("Currently installed Node.js versions:", installed, latest=latest)

    policy = Policy.PROCEED_ALL if yes else Policy.ASK_EACH
    if latest not in installed:
        if dry_run:
            print_info(f"Node.js {latest} would be installed, then these packages:")
            console.print(f"  {', '.join(packages)}")
            print_info("Dry-run mode: No changes were made.")
            return
        if not yes and not confirm(f"Install Node.js {latest}?"):
            print_info("Aborted.")
            return
        print_info(f"Installing Node.js {latest}...")
        if not toolkit.lifecycle.install(latest):
            print_error(f"Error installing Node.js {latest}.")
            return
        print_success(f"Installed Node.js {latest}")

    try:
        with toolkit.snapshot.activated(latest, restore=dry_run) as context:
            with console.status("Checking package versions..."):
                plan = toolkit.engine.plan(context, packages, target_is_latest=True)

            if plan.is_noop:
                print_success(f"Node.js {latest} and all packages are up to date.")
                print_info("Nothing to install.")
                return

            console.print(create_plan_table(plan, dry_run=dry_run))
            if dry_run:
                print_info("Dry-run mode: No changes were made.")
                return

            results = run_plan(toolkit, context, plan, policy)
    except ActivationError as e:
        print_error(str(e))
        return

    if results:
        print_results_summary(results)
    print_success(f"Installation complete. Node.js {latest} is active.")
