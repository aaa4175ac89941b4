"""Console color theme.

The bundled palette (``pubctl/data/theme.toml``) is merged with the user's
``theme.toml`` from the config directory. Only the ``[colors]`` table is
read. A user file that cannot be read or holds invalid colors is logged and
ignored, so a broken theme never stops a publish.
"""

import logging
import re
import tomllib
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from pubctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

# #RGB or #RRGGBB
_HEX_COLOR_RE = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class Palette(BaseModel):
    """Colors the console styles are built from.

    Attributes:
        text: Plain table values.
        muted: Secondary text such as table keys and status codes.
        accent: Table headers and the running progress bar.
        border: Table borders.
        success: Published and reverted messages, finished progress bar.
        warning: Non-fatal notices.
        error: Error headlines.
        info: Informational messages.
        link: URLs.
    """

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    accent: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    link: str = "#0e8ac8"

    @field_validator("*")
    @classmethod
    def validate_hex_color(cls, v: str, info: Any) -> str:
        """Accept only #RGB and #RRGGBB colors."""
        if not _HEX_COLOR_RE.fullmatch(v):
            msg = f"{info.field_name}: expected #RGB or #RRGGBB, got {v!r}"
            raise ValueError(msg)
        return v


def _read_colors(source: Path | Traversable) -> dict[str, Any]:
    """Read the [colors] table of a theme file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid TOML or [colors] is not a table.
    """
    with source.open("rb") as f:
        colors = tomllib.load(f).get("colors", {})
    if not isinstance(colors, dict):
        msg = "'colors' must be a table"
        raise ValueError(msg)
    return colors


def load_palette(user_path: Path | None = None) -> Palette:
    """Load the bundled palette with the user's overrides applied.

    Args:
        user_path: User theme file. Defaults to theme.toml in the config dir.

    Returns:
        Merged palette, or the bundled one if the overrides are unusable.
    """
    bundled = _read_colors(resources.files("pubctl.data") / "theme.toml")
    path = user_path or get_theme_path()

    try:
        overrides = _read_colors(path)
    except FileNotFoundError:
        return Palette.model_validate(bundled)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return Palette.model_validate(bundled)

    logger.debug("Applying theme overrides from %s", path)
    try:
        return Palette.model_validate({**bundled, **overrides})
    except ValidationError as e:
        logger.warning("Ignoring invalid colors in %s: %s", path, e)
        return Palette.model_validate(bundled)


def build_theme(palette: Palette) -> Theme:
    """Map a palette onto the style names used in console markup."""
    return Theme(
        {
            "text": palette.text,
            "muted": palette.muted,
            "border": palette.border,
            "bold_header": f"bold {palette.accent}",
            "success": palette.success,
            "warning": palette.warning,
            "error": f"bold {palette.error}",
            "info": palette.info,
            "url": f"underline {palette.link}",
            "bar.complete": palette.accent,
            "bar.finished": palette.success,
        }
    )


# Built on first use; the consoles share one theme per process
_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the console theme, building it on first use."""
    global _theme
    if _theme is None:
        _theme = build_theme(load_palette())
    return _theme
