"""Parallax starfield scene and the scene root."""

from .renderer import ParallaxRenderer
from .starfield import ParallaxLayer, Star, generate_layers

__all__ = ["ParallaxRenderer", "ParallaxLayer", "Star", "generate_layers"]
