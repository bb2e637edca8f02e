"""Settings and themes."""

from .settings import OrbitalSettings, get_settings
from .theme import Theme, load_theme

__all__ = ["OrbitalSettings", "Theme", "get_settings", "load_theme"]
