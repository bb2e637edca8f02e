"""Orbital: camera-driven parallax starfield and radial navigation menu."""

__version__ = "0.1.0"
