"""Shared Rich display functions for plans and results.

Provides reusable table builders and summary printers used by the
list-all, install-lts, migrate, and cleanup commands.
"""

from rich.table import Table

from nvmctl.core.reconcile import ReconcilePlan
from nvmctl.models.action import ActionResult, PackageCheck
from nvmctl.utils.formatting import (
    console,
    create_table,
    format_version,
    print_muted,
    print_success,
)


def create_packages_table(entries: list[tuple[str, list[str]]]) -> Table:
    """Create a table of global packages per runtime version.

    Args:
        entries: ``(version, package names)`` pairs.

    Returns:
        Rich Table with one row per version.
    """
    table = create_table("Global Packages", "Node Version", "Global Packages")
    for version, packages in entries:
        table.add_row(
            f"[version_other]{version}[/]",
            ", ".join(packages) if packages else "[muted](None)[/]",
        )
    return table


def create_plan_table(plan: ReconcilePlan, dry_run: bool = False) -> Table:
    """Create a table showing installed vs. latest version per package.

    Args:
        plan: Reconciliation plan to show.
        dry_run: Whether this is a dry-run (changes table title).

    Returns:
        Rich Table with one row per checked package.
    """
    title = f"Packages for Node.js {plan.target}"
    if dry_run:
        title += " (Dry Run)"

    table = create_table(title, "Status", "Package", "Installed", "Latest")
    for check in plan.checks:
        table.add_row(
            _check_status(check),
            check.name,
            format_version(check.installed_version, latest=check.latest_version),
            format_version(check.latest_version),
        )
    return table


def _check_status(check: PackageCheck) -> str:
    """Status cell markup for a package check."""
    if check.is_up_to_date:
        return "[success]current[/]"
    if check.is_missing:
        return "[added]+install[/]"
    return "[changed]~update[/]"


def create_results_table(results: list[ActionResult]) -> Table:
    """Create a Rich table displaying action results.

    Successful results show "OK" status, skipped ones "SKIP", and failed
    results show "FAIL" with the error message.

    Args:
        results: List of action results to display.

    Returns:
        Rich Table configured for results display.
    """
    table = create_table("Results", "Status", "Action", "Target", "Message")

    for result in results:
        if result.failed:
            status = "[error]FAIL[/error]"
            message = result.error or "Unknown error"
        elif result.skipped:
            status = "[muted]SKIP[/muted]"
            message = result.message or ""
        else:
            status = "[success]OK[/success]"
            message = result.message or ""

        table.add_row(
            status,
            result.action_type.value,
            result.target,
            f"[muted]{message}[/muted]",
        )

    return table


def print_versions(title: str, versions: list[str], latest: str | None = None) -> None:
    """Print a list of runtime versions, highlighting the latest one."""
    console.print(f"[info]{title}[/]")
    if not versions:
        print_muted("  (none)")
        return
    for version in versions:
        console.print(f"  {format_version(version, latest=latest)}")


def print_results_summary(results: list[ActionResult]) -> None:
    """Print a summary of action results.

    Shows a success message when nothing failed, or the succeeded, skipped,
    and failed counts otherwise.

    Args:
        results: List of action results.
    """
    done = sum(1 for r in results if r.success and not r.skipped)
    skipped = sum(1 for r in results if r.skipped)
    failed = sum(1 for r in results if r.failed)

    if failed == 0:
        suffix = f", {skipped} skipped" if skipped else ""
        print_success(f"{done} action(s) completed successfully{suffix}.")
    else:
        console.print(
            f"\n[success]{done} succeeded[/success], [muted]{skipped} skipped[/muted], "
            f"[error]{failed} failed[/error]"
        )
