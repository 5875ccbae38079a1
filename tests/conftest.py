"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, most notably
a toolkit wired to the in-memory FakeManager from ``fakes``.
"""

import json
from pathlib import Path

import pytest
from fakes import FakeManager
from nvmctl.cli.types import Toolkit


@pytest.fixture
def fake_manager(tmp_path: Path) -> FakeManager:
    """Fake manager rooted in a temporary directory."""
    return FakeManager(tmp_path / "nvm")


@pytest.fixture
def toolkit(fake_manager: FakeManager, tmp_path: Path) -> Toolkit:
    """Toolkit wired to the fake manager and a temporary ledger."""
    return Toolkit.from_manager(fake_manager, tmp_path / "nvm-global-packages.txt")


@pytest.fixture
def windows_available_output() -> str:
    """Sample ``nvm list available`` output from nvm-windows."""
    return """
|   CURRENT    |     LTS      |  OLD STABLE  | OLD UNSTABLE |
|--------------|--------------|--------------|--------------|
|    21.6.1    |   20.11.0    |   0.12.18    |   0.11.16    |
|    21.6.0    |   20.10.0    |   0.12.17    |   0.11.15    |

This is a partial list. For a complete list, visit https://nodejs.org/en/download/releases
"""


@pytest.fixture
def unix_remote_lts_output() -> str:
    """Sample ``nvm ls-remote --lts`` output from Unix nvm."""
    return """       v16.20.2   (LTS: Gallium)
       v18.19.1   (LTS: Hydrogen)
       v18.20.0   (Latest LTS: Hydrogen)
       v20.10.0   (LTS: Iron)
->     v20.11.0   (Latest LTS: Iron)
"""


@pytest.fixture
def npm_listing_output() -> str:
    """Sample ``npm ls -g --depth=0 --json`` output."""
    return json.dumps(
        {
            "name": "lib",
            "dependencies": {
                "eslint": {"version": "8.57.0", "overridden": False},
                "npm": {"version": "10.2.4", "overridden": False},
                "@angular/cli": {"version": "17.1.0", "overridden": False},
            },
        }
    )
