"""XDG-compliant path management for nvmctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration storage, plus the working-directory
relative default location of the package ledger.

XDG defaults:
- Config: ~/.config/nvmctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "nvmctl"

# Ledger file name, resolved against the working directory by default
DEFAULT_LEDGER_FILENAME = "nvm-global-packages.txt"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/nvmctl/ (or XDG_CONFIG_HOME/nvmctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the configuration file path.

    Returns:
        Path to ~/.config/nvmctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/nvmctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def resolve_ledger_path(raw: str | Path) -> Path:
    """Resolve a configured ledger path.

    Relative paths are anchored at the current working directory, so the
    ledger lands next to wherever the tool is run, as with the default.

    Args:
        raw: Configured path, possibly starting with ``~``.

    Returns:
        Absolute ledger path.
    """
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path
