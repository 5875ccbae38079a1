"""Reconciliation engine.

Compares a desired set of global packages against what a target runtime
has installed, then installs the outdated or missing ones under a batch
or per-item policy.

A package is up to date only when its installed and latest registry
versions are both known and exactly equal as strings. Everything else is
a candidate.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from nvmctl.core.policy import Choice, Policy, decide
from nvmctl.core.snapshot import PackageSnapshot
from nvmctl.managers.base import RuntimeContext
from nvmctl.models.action import ActionResult, ActionType, Decision, PackageCheck, skipped_result
from nvmctl.operators.npm import NpmOperator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcilePlan:
    """Checked state of every desired package under a target version.

    Attributes:
        target: Target runtime version.
        target_is_latest: Whether the target is the latest stable release.
        checks: One check per desired package, in input order.
    """

    target: str
    target_is_latest: bool
    checks: tuple[PackageCheck, ...]

    @property
    def candidates(self) -> list[PackageCheck]:
        """Packages that are missing or not at the latest version."""
        return [check for check in self.checks if check.is_candidate]

    @property
    def up_to_date(self) -> list[PackageCheck]:
        """Packages already at the latest version."""
        return [check for check in self.checks if check.is_up_to_date]

    @property
    def is_noop(self) -> bool:
        """Nothing to do: latest runtime and every package current."""
        return self.target_is_latest and not self.candidates


# Prompt for one candidate; receives the check and returns the user's answer
AskFn = Callable[[PackageCheck], Choice]


class ReconciliationEngine:
    """Plans and applies package installs onto a target runtime.

    Example:
        >>> engine = ReconciliationEngine(snapshot)
        >>> with snapshot.activated("20.11.0") as ctx:
        ...     plan = engine.plan(ctx, ["eslint", "prettier"], target_is_latest=True)
        ...     if not plan.is_noop:
        ...         results = engine.apply(ctx, plan, Policy.PROCEED_ALL)
    """

    def __init__(self, snapshot: PackageSnapshot) -> None:
        """Initialize the engine.

        Args:
            snapshot: Package lookups used for planning.
        """
        self.snapshot = snapshot

    def check(self, context: RuntimeContext, name: str) -> PackageCheck:
        """Look up the installed and latest versions of one package."""
        return PackageCheck(
            name=name,
            installed_version=self.snapshot.installed_version_of(context, name),
            latest_version=self.snapshot.latest_registry_version_of(context, name),
        )

    def plan(
        self,
        context: RuntimeContext,
        packages: list[str],
        *,
        target_is_latest: bool,
    ) -> ReconcilePlan:
        """Check every desired package under the target context.

        Args:
            context: Target runtime.
            packages: Desired package names. Duplicates are checked once.
            target_is_latest: Whether the target is the latest stable release.

        Returns:
            ReconcilePlan for the target.
        """
        unique = list(dict.fromkeys(packages))
        checks = tuple(self.check(context, name) for name in unique)
        logger.debug(
            "Planned %d package(s) for Node.js %s: %d candidate(s)",
            len(checks),
            context.version,
            sum(1 for c in checks if c.is_candidate),
        )
        return ReconcilePlan(
            target=context.version,
            target_is_latest=target_is_latest,
            checks=checks,
        )

    def apply(
        self,
        context: RuntimeContext,
        plan: ReconcilePlan,
        policy: Policy,
        ask: AskFn | None = None,
        on_result: Callable[[ActionResult], None] | None = None,
    ) -> list[ActionResult]:
        """Install the plan's candidates under a policy.

        A failed install is recorded and the loop moves on to the next
        candidate.

        Args:
            context: Target runtime; must match the plan's target.
            plan: Plan produced by ``plan``.
            policy: Starting policy. "All remaining" answers escalate it.
            ask: Prompt used under ASK_EACH. Required for that policy.
            on_result: Called after each candidate is decided and handled.

        Returns:
            One ActionResult per candidate, in plan order.

        Raises:
            ValueError: If the context does not match the plan, or ASK_EACH
                is requested without a prompt.
        """
        if context.version != plan.target:
            msg = f"Plan targets Node.js {plan.target}, context is {context.version}"
            raise ValueError(msg)
        if policy == Policy.ASK_EACH and ask is None:
            msg = "A prompt is required for per-package decisions"
            raise ValueError(msg)

        prompt: AskFn = ask if ask is not None else _no_prompt
        operator = NpmOperator(context)
        results: list[ActionResult] = []

        for check in plan.candidates:
            decision, policy = decide(policy, lambda: prompt(check))  # noqa: B023

            if decision == Decision.SKIP:
                result = skipped_result(ActionType.INSTALL, check.name)
            else:
                result = operator.install(check.name)
                if result.failed:
                    logger.warning("Installing %s failed: %s", check.name, result.error)

            results.append(result)
            if on_result is not None:
                on_result(result)

        return results


def _no_prompt(check: PackageCheck) -> Choice:
    """Stand-in prompt for batch policies, which never ask."""
    msg = f"No prompt available to decide {check.name}"
    raise RuntimeError(msg)
