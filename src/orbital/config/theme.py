"""
Scene theme dataclasses and theme loading utilities.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import logging

import yaml

from orbital.graphics.primitives import Color, hex_to_rgb

logger = logging.getLogger(__name__)

THEMES_PATH = Path(__file__).parent / "themes"
DEFAULT_THEME = "synthwave"


@dataclass
class NebulaCloud:
    """One soft radial gradient of the nebula backdrop.

    ``offset`` is relative to the viewport center.
    """
    offset: tuple[float, float]
    radius: float
    colors: tuple[str, str]
    opacity: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NebulaCloud":
        offset = data.get("offset", (0.0, 0.0))
        colors = data["colors"]
        if len(colors) != 2:
            raise ValueError(f"Nebula cloud needs exactly two colors, got {colors!r}")
        return cls(
            offset=(float(offset[0]), float(offset[1])),
            radius=float(data["radius"]),
            colors=(str(colors[0]), str(colors[1])),
            opacity=float(data["opacity"]),
        )


def _default_nebula() -> list[NebulaCloud]:
    return [
        NebulaCloud((-200.0, -100.0), 400.0, ("#4e2a5b", "#6e4e8d"), 0.12),
        NebulaCloud((150.0, 50.0), 350.0, ("#9b79b9", "#f3a0c0"), 0.10),
        NebulaCloud((-50.0, 200.0), 300.0, ("#ff6bca", "#fc3d7a"), 0.07),
        NebulaCloud((250.0, -150.0), 320.0, ("#ff9952", "#ff7684"), 0.05),
    ]


@dataclass
class ThemeColors:
    """Theme color palette."""
    star_palette: list[str] = field(default_factory=lambda: [
        "#fcdfd4", "#ff9952", "#ff7684", "#ff6bca", "#f3a0c0", "#9b79b9",
    ])
    backdrop: list[tuple[float, str]] = field(default_factory=lambda: [
        (0.0, "#1d1153"), (0.7, "#0a0a0a"), (1.0, "#000000"),
    ])
    menu_segment: str = "#1d1153"
    menu_hover: str = "#ff6bca"
    menu_divider: str = "#9b79b9"
    menu_ring: str = "#f3a0c0"
    menu_label: str = "#fcdfd4"
    panel_text: str = "#fcdfd4"

    def to_rgb(self, color_name: str) -> Color:
        """Convert a named hex color to a 0.0-1.0 RGB tuple."""
        return hex_to_rgb(getattr(self, color_name, self.panel_text))

    def backdrop_stops(self) -> list[tuple[float, Color]]:
        return [(float(offset), hex_to_rgb(c)) for offset, c in self.backdrop]


@dataclass
class Theme:
    """Complete scene theme."""
    name: str = DEFAULT_THEME
    description: str = ""
    colors: ThemeColors = field(default_factory=ThemeColors)
    nebula: list[NebulaCloud] = field(default_factory=_default_nebula)

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "Theme":
        """Create theme from YAML data."""
        theme = cls(
            name=data.get("name", DEFAULT_THEME),
            description=data.get("description", ""),
        )

        if "colors" in data:
            colors = dict(data["colors"])
            if "backdrop" in colors:
                colors["backdrop"] = [(float(o), str(c)) for o, c in colors["backdrop"]]
            theme.colors = ThemeColors(**colors)

        if not theme.colors.star_palette:
            raise ValueError(f"Theme {theme.name!r} has an empty star palette")

        if "nebula" in data:
            theme.nebula = [NebulaCloud.from_dict(c) for c in data["nebula"] or []]

        return theme


def load_theme(theme_name: str, themes_path: Path | None = None) -> Theme:
    """
    Load a theme from YAML file.

    Args:
        theme_name: Name of the theme (without .yaml extension)
        themes_path: Path to themes directory

    Returns:
        Theme instance; the built-in defaults if the file does not exist
    """
    if themes_path is None:
        themes_path = THEMES_PATH

    theme_file = themes_path / f"{theme_name}.yaml"

    if not theme_file.exists():
        logger.warning(f"Theme {theme_name!r} not found in {themes_path}, using defaults")
        return Theme(name=theme_name)

    with open(theme_file, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    logger.debug(f"Loaded theme {theme_name!r} from {theme_file}")
    return Theme.from_yaml(data)


def list_themes(themes_path: Path | None = None) -> list[str]:
    """List available themes."""
    if themes_path is None:
        themes_path = THEMES_PATH
    return sorted(f.stem for f in themes_path.glob("*.yaml"))
