"""Version manager adapters.

This module exports the adapters wrapping nvm (Unix) and nvm-windows.
"""

from pathlib import Path

from nvmctl.managers.base import ManagerError, RuntimeContext, VersionManager
from nvmctl.managers.nvm import NvmManager
from nvmctl.managers.nvm_windows import NvmWindowsManager
from nvmctl.models.runtime import Platform


def get_manager(platform: Platform | None = None, home: str | None = None) -> VersionManager:
    """Create the adapter for a platform.

    Args:
        platform: Target platform. If None, detected from the interpreter.
        home: Installation root override.

    Returns:
        VersionManager for the platform.
    """
    platform = platform or Platform.detect()
    root = Path(home).expanduser() if home else None
    if platform == Platform.WINDOWS:
        return NvmWindowsManager(home=root)
    return NvmManager(home=root)


__all__ = [
    "ManagerError",
    "NvmManager",
    "NvmWindowsManager",
    "RuntimeContext",
    "VersionManager",
    "get_manager",
]
