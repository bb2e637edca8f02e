"""Radial navigation menu."""

from .anchor import AnchorProvider, CallableAnchor, FixedAnchor
from .geometry import HalfCircleDirection, MenuSegment, Orientation, layout_segments
from .radial_menu import MenuTimings, RadialMenu, RadialMenuItem

__all__ = [
    "AnchorProvider",
    "CallableAnchor",
    "FixedAnchor",
    "HalfCircleDirection",
    "MenuSegment",
    "MenuTimings",
    "Orientation",
    "RadialMenu",
    "RadialMenuItem",
    "layout_segments",
]
