"""Package install flow shared by install-lts and migrate.

Both commands end the same way: a plan is applied onto an activated
target, asking per package unless the user opted for a batch policy.
"""

from nvmctl.cli.prompts import INSTALL_LABELS, ask_choice
from nvmctl.cli.types import Toolkit
from nvmctl.core.policy import Choice, Policy
from nvmctl.core.reconcile import AskFn, ReconcilePlan
from nvmctl.core.snapshot import PackageSnapshot
from nvmctl.managers.base import RuntimeContext
from nvmctl.models.action import ActionResult, PackageCheck
from nvmctl.utils.formatting import (
    console,
    format_version,
    print_error,
    print_muted,
    print_success,
)


def package_prompt(snapshot: PackageSnapshot, context: RuntimeContext) -> AskFn:
    """Build the per-package prompt for a target runtime.

    The prompt shows the package description and both versions before
    asking.

    Args:
        snapshot: Used to fetch the package description.
        context: Target runtime.

    Returns:
        Prompt function for ``ReconciliationEngine.apply``.
    """

    def ask(check: PackageCheck) -> Choice:
        description = snapshot.description_of(context, check.name)
        console.print(f"\n[bold]{check.name}[/]")
        print_muted(f"  {description}")
        console.print(
            f"  Latest: {format_version(check.latest_version)}"
            f"  Installed: {format_version(check.installed_version, latest=check.latest_version)}"
        )
        return ask_choice(f"Install {check.name}?", INSTALL_LABELS, Choice.YES)

    return ask


def report_install(result: ActionResult) -> None:
    """Print the outcome of one package install as it happens."""
    if result.skipped:
        print_muted(f"Skipped {result.target}.")
    elif result.success:
        print_success(f"{result.target}: {result.message}")
    else:
        print_error(f"Failed to install {result.target}: {result.error}")


def run_plan(
    toolkit: Toolkit,
    context: RuntimeContext,
    plan: ReconcilePlan,
    policy: Policy,
) -> list[ActionResult]:
    """Apply a plan onto its target, reporting each package.

    Args:
        toolkit: Components bound to the version manager.
        context: Activated target runtime.
        plan: Plan for that target.
        policy: PROCEED_ALL to install everything, ASK_EACH to prompt.

    Returns:
        One result per candidate package.
    """
    if not plan.candidates:
        print_success(f"All packages are up to date on Node.js {plan.target}.")
        return []

    ask = package_prompt(toolkit.snapshot, context) if policy == Policy.ASK_EACH else None
    return toolkit.engine.apply(context, plan, policy, ask=ask, on_result=report_install)
