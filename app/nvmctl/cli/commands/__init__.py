"""CLI commands for nvmctl.

This package contains all subcommand implementations.
"""

from nvmctl.cli.commands import cleanup, config, fix_failed, install_lts, list_all, migrate

__all__ = ["cleanup", "config", "fix_failed", "install_lts", "list_all", "migrate"]
