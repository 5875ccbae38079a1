"""Config command implementation.

Shows the effective settings and writes a starter config file.
"""

from typing import Annotated

import typer

from nvmctl.cli.types import load_settings
from nvmctl.core.config import ConfigError, NvmctlConfig, save_config
from nvmctl.core.paths import get_config_path
from nvmctl.managers import get_manager
from nvmctl.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Show or create the nvmctl configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration.

    Values come from the config file when it exists, otherwise from the
    environment (NVM_DIR / NVM_HOME) and built-in defaults.
    """
    config_path = get_config_path()
    config = load_settings()
    manager = get_manager(config.effective_platform, config.nvm_dir)

    table = create_table("nvmctl Configuration", "Setting", "Value")
    table.add_row("Config file", str(config_path) if config_path.exists() else "[muted](none)[/]")
    table.add_row("Platform", f"{config.platform} ({manager.platform.value})")
    table.add_row("NVM directory", str(manager.home))
    table.add_row("Versions directory", str(manager.versions_dir))
    table.add_row("Package list", str(config.ledger_file))
    console.print(table)

    if not manager.is_available():
        print_warning(f"{manager.platform.value} nvm not found at {manager.home}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_warning(f"Config already exists: {config_path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(NvmctlConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {saved}")
