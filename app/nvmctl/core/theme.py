"""Console color theme.

Colors come from the ``[colors]`` table of the bundled ``data/theme.toml``,
optionally overridden per key by ``~/.config/nvmctl/theme.toml``. Rich
markup in the commands refers to the style names produced by
:func:`get_rich_theme`, never to raw colors.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from nvmctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _check_hex(value: str) -> str:
    color = value.strip()
    if not color.startswith("#"):
        msg = f"color must start with '#', got {value!r}"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"color must be #RGB or #RRGGBB, got {value!r}"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"invalid hex color {value!r}"
        raise ValueError(msg) from None
    return color


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Palette used for all console output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Plan and result rows
    added: HexColor = "#c1ff62"
    removed: HexColor = "#f53263"
    changed: HexColor = "#0e8ac8"

    version_latest: HexColor = "#69B9A1"
    version_other: HexColor = "#b2bec3"


# style name -> (palette entry, extra Rich attributes)
STYLE_RECIPES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "added": ("added", ""),
    "removed": ("removed", ""),
    "changed": ("changed", ""),
    "version_latest": ("version_latest", "bold"),
    "version_other": ("version_other", ""),
    "package.name": ("text", "bold"),
}


def _read_colors(raw: bytes, source: str) -> dict[str, str] | None:
    """Pull the string entries of the ``[colors]`` table out of TOML bytes.

    Returns:
        Color mapping, or None if the document is unusable.
    """
    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", source, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", source)
        return None
    return {key: value for key, value in table.items() if isinstance(value, str)}


def _read_user_colors(path: Path) -> dict[str, str]:
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return {}
    except OSError as e:
        logger.warning("Cannot read theme file %s: %s", path, e)
        return {}
    logger.debug("Loading theme overrides from %s", path)
    return _read_colors(raw, str(path)) or {}


def load_theme() -> ThemeColors:
    """Merge the bundled palette with the user's overrides.

    An invalid user palette is reported and replaced by the built-in
    defaults as a whole, so a typo never leaves half a theme applied.
    """
    bundled_raw = resources.files("nvmctl.data").joinpath("theme.toml").read_bytes()
    bundled = _read_colors(bundled_raw, "bundled theme.toml") or {}
    merged = {**bundled, **_read_user_colors(get_user_theme_path())}

    try:
        return ThemeColors.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid theme configuration, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a palette.

    Args:
        colors: Palette to use. If None, it is loaded from disk.

    Returns:
        Rich Theme defining every style in ``STYLE_RECIPES``.
    """
    colors = colors or load_theme()
    styles = {}
    for style, (entry, attributes) in STYLE_RECIPES.items():
        color = getattr(colors, entry)
        styles[style] = f"{attributes} {color}".strip()
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return get_rich_theme()
