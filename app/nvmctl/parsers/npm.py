"""Parsers for npm command output."""

import json
import logging
from typing import Any, cast

from nvmctl.models.runtime import GlobalPackage

logger = logging.getLogger(__name__)


class NpmOutputError(ValueError):
    """Raised when npm output does not have the expected shape."""


def parse_global_listing(output: str) -> list[GlobalPackage]:
    """Parse ``npm ls -g --depth=0 --json`` output.

    npm exits non-zero when the tree has extraneous or invalid entries but
    still prints a usable document, so only the JSON itself is judged here.
    The bundled ``npm`` package is dropped.

    Example input::

        {"dependencies": {"eslint": {"version": "8.57.0"}, "npm": {"version": "10.2.4"}}}

    Args:
        output: Raw stdout of the listing command.

    Returns:
        Packages in listing order. Empty when nothing is installed.

    Raises:
        NpmOutputError: If output is not a JSON object.
    """
    if not output.strip():
        raise NpmOutputError("npm produced no output")

    try:
        data: object = json.loads(output)
    except json.JSONDecodeError as e:
        raise NpmOutputError(f"Invalid JSON from npm: {e}") from e

    if not isinstance(data, dict):
        raise NpmOutputError("Expected a JSON object from npm ls")

    dependencies = cast(dict[str, Any], data).get("dependencies") or {}
    if not isinstance(dependencies, dict):
        raise NpmOutputError("Unexpected 'dependencies' value in npm ls output")

    packages: list[GlobalPackage] = []
    for name, info in cast(dict[str, Any], dependencies).items():
        if not name:
            continue
        version = info.get("version") if isinstance(info, dict) else None
        package = GlobalPackage(name=name, version=version or None)
        if not package.is_bootstrap:
            packages.append(package)
    return packages


def parse_view_field(output: str) -> str | None:
    """Parse the value printed by ``npm view <name> <field>``.

    A plain field prints one line; the last non-empty line is taken so that
    npm notices printed before the value do not leak into it.

    Returns:
        The field value, or None if npm printed nothing.
    """
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    if not lines:
        return None
    return lines[-1]
