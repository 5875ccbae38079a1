"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table

from nvmctl.core.theme import get_theme


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_table(title: str, *columns: str) -> Table:
    """Create a pre-configured table with the shared header and border styles.

    Args:
        title: Table title.
        columns: Column headers, added left to right.

    Returns:
        Rich Table with the given columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    for column in columns:
        table.add_column(column)
    return table


def format_version(version: str | None, *, latest: str | None = None) -> str:
    """Format a version string with markup, highlighting the latest one.

    Args:
        version: Version to format. None renders as a dash.
        latest: Version to highlight, if any.

    Returns:
        Rich markup string.
    """
    if version is None:
        return "[muted]-[/]"
    if latest is not None and version == latest:
        return f"[version_latest]{version}[/]"
    return f"[version_other]{version}[/]"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_muted(message: str) -> None:
    """Print a de-emphasized detail line."""
    console.print(f"[muted]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
