"""Console colors for sync output.

The bundled `data/theme.toml` provides the palette; a user file at
~/.config/appxsync/theme.toml may override any subset of it. Style names
match the markup used by the CLI (`[added]`, `[removed]`, `[changed]`, ...).
"""

import logging
import re
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from appxsync.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Palette used by the console; every value is a #RGB or #RRGGBB code."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Source-list and manifest diff markers
    added: str = "#c1ff62"
    removed: str = "#f53263"
    changed: str = "#0e8ac8"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        if not isinstance(value, str):
            raise ValueError("color must be a string")
        color = value.strip()
        if not color.startswith("#"):
            raise ValueError(f"color must start with '#': {color!r}")
        if not _HEX_COLOR.fullmatch(color):
            raise ValueError(f"invalid hex color {color!r}")
        return color


def get_bundled_theme_path() -> Path:
    return Path(str(resources.files("appxsync.data").joinpath("theme.toml")))


def _read_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file; None if unusable."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors")
    if not isinstance(table, dict):
        logger.warning("Theme file %s has no [colors] table", path)
        return None
    return {name: value for name, value in table.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Bundled palette with the user's overrides applied.

    An invalid override is reported and the defaults are used instead.
    """
    colors = _read_colors(get_bundled_theme_path()) or {}
    overrides = _read_colors(get_user_theme_path())
    if overrides:
        logger.debug("Applying %d theme overrides", len(overrides))
        colors.update(overrides)

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Invalid theme, falling back to defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme; loads the palette when none is given."""
    palette = colors or load_theme()
    styles = palette.model_dump()
    styles["error"] = f"bold {palette.error}"
    styles["bold_header"] = f"bold {palette.header}"
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme shared by the module-level consoles."""
    return get_rich_theme()
