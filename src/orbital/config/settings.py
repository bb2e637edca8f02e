"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested groups are addressed with a double underscore, e.g.
``ORBITAL_CAMERA__EASE=0.1``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CameraSettings(BaseSettings):
    """Camera easing settings."""

    ease: float = Field(default=0.08, gt=0.0, lt=1.0)
    position_threshold: float = Field(default=0.5, gt=0.0)
    rotation_threshold: float = Field(default=0.1, gt=0.0)
    transition_ms: float = Field(default=2000.0, ge=0.0)

    # Hover preview blend
    preview_intensity: float = Field(default=0.25, ge=0.0, le=1.0)


class SceneSettings(BaseSettings):
    """Parallax starfield settings."""

    twinkle: Literal["enhanced", "tranquil"] = "enhanced"
    field_expansion: float = Field(default=1.5, ge=1.0)
    cull_margin: float = 100.0

    # Nebula barely moves
    nebula_parallax: float = 0.05
    nebula_rotation: float = 0.02


class MenuSettings(BaseSettings):
    """Radial menu geometry and animation timings."""

    ring_width: float = Field(default=80.0, gt=0.0)

    appear_ms: float = 270.0
    appear_stagger_ms: float = 50.0
    disappear_ms: float = 350.0
    disappear_stagger_ms: float = 60.0
    appear_easing: str = "ease_out_cubic"
    disappear_easing: str = "ease_in_quad"


class WindowSettings(BaseSettings):
    """Simulator window settings."""

    width: int = 1280
    height: int = 720
    fps: int = 60
    fullscreen: bool = False
    title: str = "ORBITAL"


class OrbitalSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ORBITAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False
    theme: str = "synthwave"
    start_route: str = "/"

    # Paths
    config_path: Path = Field(default_factory=lambda: Path(__file__).parent)
    routes_file: Optional[Path] = None
    log_file: Optional[Path] = None

    # Nested settings
    camera: CameraSettings = Field(default_factory=CameraSettings)
    scene: SceneSettings = Field(default_factory=SceneSettings)
    menu: MenuSettings = Field(default_factory=MenuSettings)
    window: WindowSettings = Field(default_factory=WindowSettings)

    @property
    def themes_path(self) -> Path:
        """Path to themes configuration."""
        return self.config_path / "themes"


@lru_cache
def get_settings() -> OrbitalSettings:
    """Get cached settings instance."""
    return OrbitalSettings()
