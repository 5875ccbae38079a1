"""List-all command implementation.

Records the global npm packages of every installed Node.js version in the
package ledger and shows them.
"""

import json
from typing import Annotated

import typer

from nvmctl.cli.display import create_packages_table
from nvmctl.cli.types import build_toolkit
from nvmctl.core.snapshot import ActivationError
from nvmctl.models.runtime import is_version, normalize_version
from nvmctl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="List global packages of every Node.js version and save them.",
    invoke_without_command=True,
)

ALL_VERSIONS = "all"


def select_versions(raw: str | None, installed: list[str]) -> list[str]:
    """Resolve the --versions option against the installed versions.

    Args:
        raw: Comma-separated versions, "all", or None for all.
        installed: Installed versions in ascending order.

    Returns:
        Selected versions in the order given.

    Raises:
        ValueError: If any requested version is not installed.
    """
    if raw is None or raw.strip().lower() == ALL_VERSIONS:
        return list(installed)

    requested = [item.strip() for item in raw.split(",") if item.strip()]
    selected = [normalize_version(item) if is_version(item) else item for item in requested]
    invalid = [item for item in selected if item not in installed]
    if invalid or not selected:
        msg = f"Invalid version(s): {', '.join(invalid) or raw}"
        raise ValueError(msg)
    return list(dict.fromkeys(selected))


@app.callback(invoke_without_command=True)
def list_all(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the result as JSON instead of a table.",
        ),
    ] = False,
    versions: Annotated[
        str | None,
        typer.Option(
            "--versions",
            help="Comma-separated versions to inspect, or 'all'.",
        ),
    ] = None,
) -> None:
    """List global packages of every installed Node.js version.

    Each version is activated in turn and its global npm packages are
    recorded; the previously active version is restored afterwards. The
    result overwrites the package ledger used by install-lts.

    Examples:
        nvmctl list-all
        nvmctl list-all --versions 18.20.0,20.11.0
        nvmctl list-all --json
    """
    if ctx.invoked_subcommand is not None:
        return

    toolkit = build_toolkit()
    installed = toolkit.inventory.list_installed()
    if not installed:
        print_warning("No Node.js versions found installed with nvm.")
        return

    try:
        selected = select_versions(versions, installed)
    except ValueError as e:
        print_error(str(e))
        print_warning(f"Installed versions: {', '.join(installed)}")
        raise typer.Exit(code=1) from e

    if not json_output:
        print_info(f"Found {len(installed)} Node.js version(s), inspecting {len(selected)}")

    entries: list[tuple[str, list[str]]] = []
    for version in selected:
        if not json_output:
            print_info(f"Processing Node.js version {version}...")
        try:
            with toolkit.snapshot.activated(version) as context:
                packages = toolkit.snapshot.global_packages_of_active(context)
        except ActivationError as e:
            print_warning(f"{e}, skipping.")
            continue
        entries.append((version, packages))

    try:
        ledger_path = toolkit.ledger.write(entries)
    except OSError as e:
        print_error(f"Could not write package list to {toolkit.ledger.path}: {e}")
        ledger_path = None

    if json_output:
        data = [{"version": version, "packages": packages} for version, packages in entries]
        console.print_json(json.dumps(data))
        return

    console.print(create_packages_table(entries))
    if ledger_path is not None:
        print_success(f"Global packages saved to {ledger_path}")
