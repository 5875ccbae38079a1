"""Interactive terminal prompts.

Thin wrappers over typer prompts for the per-item four-way question and
for picking one value out of a list.
"""

import click
import typer

from nvmctl.core.policy import Choice
from nvmctl.utils.formatting import console

INSTALL_LABELS: dict[Choice, str] = {
    Choice.YES: "yes",
    Choice.NO: "no",
    Choice.YES_ALL: "yes to all remaining",
    Choice.NO_ALL: "no to all remaining",
}

UNINSTALL_LABELS: dict[Choice, str] = {
    Choice.YES: "yes",
    Choice.NO: "no",
    Choice.YES_ALL: "yes to all remaining",
    Choice.NO_ALL: "skip all remaining",
}


def ask_choice(message: str, labels: dict[Choice, str], default: Choice) -> Choice:
    """Ask the four-way per-item question.

    Args:
        message: Question to show.
        labels: Description of each answer.
        default: Answer used when the user just presses Enter.

    Returns:
        The chosen answer.
    """
    legend = ", ".join(f"{choice.value} = {label}" for choice, label in labels.items())
    console.print(f"[muted]  ({legend})[/]")
    answer = typer.prompt(
        message,
        type=click.Choice([choice.value for choice in labels], case_sensitive=False),
        default=default.value,
    )
    return Choice(answer.lower())


def select_option(message: str, options: list[str], default: str) -> str:
    """Ask the user to pick one of a list of values.

    Args:
        message: Question to show.
        options: Allowed answers, listed before the prompt.
        default: Answer used when the user just presses Enter.

    Returns:
        The chosen value.
    """
    for option in options:
        marker = " (default)" if option == default else ""
        console.print(f"  [info]-[/] {option}[muted]{marker}[/]")
    answer: str = typer.prompt(
        message,
        type=click.Choice(options, case_sensitive=False),
        default=default,
        show_choices=False,
    )
    return answer


def confirm(message: str, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return typer.confirm(message, default=default)
