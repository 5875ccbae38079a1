"""CLI package for nvmctl.

This package contains the Typer application and all subcommands.
"""

from nvmctl.cli.main import app

__all__ = ["app"]
