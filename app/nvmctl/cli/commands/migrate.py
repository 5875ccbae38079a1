"""Migrate command implementation.

Copies global npm packages from one or all installed Node.js versions
onto a target version.
"""

from collections.abc import Callable
from typing import Annotated

import typer

from nvmctl.cli.display import create_plan_table, print_results_summary
from nvmctl.cli.flows import run_plan
from nvmctl.cli.prompts import confirm, select_option
from nvmctl.cli.types import build_toolkit
from nvmctl.core.policy import Policy
from nvmctl.core.snapshot import ActivationError
from nvmctl.models.runtime import GlobalPackage, normalize_version
from nvmctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Migrate global packages between Node.js versions.",
    invoke_without_command=True,
)

LATEST = "latest"
ALL_SOURCES = "all"


def resolve_choice(raw: str, keyword: str) -> str:
    """Normalize a version answer, passing a keyword such as "all" through.

    Raises:
        ValueError: If raw is neither the keyword nor a version.
    """
    text = raw.strip()
    if text.lower() == keyword:
        return keyword
    return normalize_version(text)


def collect_packages(
    sources: list[str], packages_of: Callable[[str], list[GlobalPackage]]
) -> dict[str, GlobalPackage]:
    """Union the global packages of several versions.

    Args:
        sources: Versions to read, in order.
        packages_of: Returns the GlobalPackage list of one version.

    Returns:
        Package name to the package as first seen.
    """
    collected: dict[str, GlobalPackage] = {}
    for version in sources:
        for package in packages_of(version):
            collected.setdefault(package.name, package)
    return collected


@app.callback(invoke_without_command=True)
def migrate(
    ctx: typer.Context,
    to: Annotated[
        str | None,
        typer.Option(
            "--to",
            help="Target version, or 'latest' for the latest LTS.",
        ),
    ] = None,
    from_: Annotated[
        str | None,
        typer.Option(
            "--from",
            help="Source version, or 'all' for every installed version.",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Install every package without asking.",
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
    """Migrate global packages between Node.js versions.

    Collects the global packages of the source version (or of every
    installed version) and installs the missing or outdated ones on the
    target, which is installed first if needed and left active afterwards.
    Without --to and --from, both are asked for interactively.

    Examples:
        nvmctl migrate --from 18.20.0 --to latest
        nvmctl migrate --from all --to 20.11.0 --yes
    """
    if ctx.invoked_subcommand is not None:
        return

    toolkit = build_toolkit()
    installed = toolkit.inventory.list_installed()
    if not installed:
        print_warning("No Node.js versions found installed with nvm.")
        return

    target_raw = to or select_option(
        "Select Node.js version to migrate to", [*installed, LATEST], default=LATEST
    )
    source_raw = from_ or select_option(
        "Select source for migration", [*installed, ALL_SOURCES], default=ALL_SOURCES
    )

    try:
        target = resolve_choice(target_raw, LATEST)
        source = resolve_choice(source_raw, ALL_SOURCES)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if source != ALL_SOURCES and source not in installed:
        print_error(f"Source version {source} is not installed.")
        print_warning(f"Installed versions: {', '.join(installed)}")
        raise typer.Exit(code=1)

    latest: str | None = None
    if target == LATEST:
        latest = toolkit.inventory.latest_stable()
        if latest is None:
            print_error("Could not detect latest stable LTS version.")
            return
        target = latest

    if source == target:
        print_warning(f"Source and target are both Node.js {target}; nothing to migrate.")
        return

    if target not in installed:
        if dry_run:
            print_info(f"Node.js {target} is not installed and would be installed first.")
            print_info("Dry-run mode: No changes were made.")
            return
        print_warning(f"Target Node.js version {target} is not installed. Installing...")
        if not toolkit.lifecycle.install(target):
            print_error(f"Failed to install Node.js {target}. Aborting migration.")
            return
        if target not in toolkit.inventory.list_installed():
            print_error(f"Node.js {target} is still not listed after install. Aborting migration.")
            return
        print_success(f"Installed Node.js {target}")

    sources = (
        [version for version in installed if version != target]
        if source == ALL_SOURCES
        else [source]
    )
    print_info(f"Collecting global packages from: {', '.join(sources)}")
    collected = collect_packages(sources, toolkit.snapshot.packages_of)
    if not collected:
        print_warning("No global packages found to migrate.")
        return

    console.print("[info]Packages to migrate:[/]")
    for package in collected.values():
        console.print(f"  - {package.label}")

    try:
        with toolkit.snapshot.activated(target, restore=dry_run) as context:
            with console.status("Checking package versions..."):
                plan = toolkit.engine.plan(
                    context, list(collected), target_is_latest=target == latest
                )

            if plan.is_noop:
                print_success(f"Node.js {target} and all packages are up to date.")
                return

            console.print(create_plan_table(plan, dry_run=dry_run))
            if dry_run:
                print_info("Dry-run mode: No changes were made.")
                return

            batch = yes or (
                bool(plan.candidates)
                and confirm(f"Install all {len(plan.candidates)} package(s) without prompting?")
            )
            policy = Policy.PROCEED_ALL if batch else Policy.ASK_EACH
            results = run_plan(toolkit, context, plan, policy)
    except ActivationError as e:
        print_error(str(e))
        return

    if results:
        print_results_summary(results)
    print_success(f"Migration complete. Node.js {target} is active.")
