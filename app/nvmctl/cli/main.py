"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from nvmctl import __version__
from nvmctl.cli.commands import cleanup, config, fix_failed, install_lts, list_all, migrate

app = typer.Typer(
    name="nvmctl",
    help="Manage Node.js versions and global npm packages on top of nvm.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nvmctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every nvm and npm call.",
        ),
    ] = False,
) -> None:
    """nvmctl - Node.js version and global package manager.

    Records the global npm packages of every installed Node.js version,
    restores them onto the latest LTS release, migrates them between
    versions, and removes old versions.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands; the short names are kept as hidden aliases
app.add_typer(list_all.app, name="list-all")
app.add_typer(list_all.app, name="extract", hidden=True)
app.add_typer(cleanup.app, name="cleanup")
app.add_typer(install_lts.app, name="install-lts")
app.add_typer(install_lts.app, name="install", hidden=True)
app.add_typer(fix_failed.app, name="fix-failed")
app.add_typer(fix_failed.app, name="fix", hidden=True)
app.add_typer(migrate.app, name="migrate")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
