"""Batch policy for per-item prompts.

Install and uninstall loops ask once per item with four answers: yes, no,
yes to all remaining, no to all remaining. The two "all remaining" answers
escalate the policy for the rest of the run and it never drops back to
asking.
"""

from collections.abc import Callable
from enum import Enum

from nvmctl.models.action import Decision


class Choice(str, Enum):
    """Answer to a single per-item prompt."""

    YES = "y"
    NO = "n"
    YES_ALL = "y-all"
    NO_ALL = "n-all"

    @property
    def decision(self) -> Decision:
        """Decision for the item the answer was given for."""
        if self in (Choice.YES, Choice.YES_ALL):
            return Decision.PROCEED
        return Decision.SKIP


class Policy(Enum):
    """How the remaining items of a loop are decided."""

    ASK_EACH = "ask-each"
    PROCEED_ALL = "proceed-all"
    SKIP_ALL = "skip-all"

    def escalate(self, choice: Choice) -> "Policy":
        """Return the policy in force after an answer.

        Only ASK_EACH can change; the batch policies are final.
        """
        if self is not Policy.ASK_EACH:
            return self
        if choice == Choice.YES_ALL:
            return Policy.PROCEED_ALL
        if choice == Choice.NO_ALL:
            return Policy.SKIP_ALL
        return self


def decide(policy: Policy, ask: Callable[[], Choice]) -> tuple[Decision, Policy]:
    """Decide one item under a policy, asking only when the policy says to.

    Args:
        policy: Policy in force for this item.
        ask: Prompts the user; not called under a batch policy.

    Returns:
        The decision for this item and the policy for the next one.
    """
    if policy == Policy.PROCEED_ALL:
        return Decision.PROCEED, policy
    if policy == Policy.SKIP_ALL:
        return Decision.SKIP, policy

    choice = ask()
    return choice.decision, policy.escalate(choice)
