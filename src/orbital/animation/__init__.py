"""Easing curves for menu animations."""

from .easing import Easing, get_easing, interpolate

__all__ = ["Easing", "get_easing", "interpolate"]
