"""Easing functions for the menu's staggered item animations.

All functions take a normalized time t (0.0 to 1.0) and return a normalized value.
"""

from enum import Enum, auto
from typing import Callable


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()

    EASE_IN_QUAD = auto()
    EASE_OUT_QUAD = auto()

    EASE_IN_CUBIC = auto()
    EASE_OUT_CUBIC = auto()
    EASE_IN_OUT_CUBIC = auto()


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_in_quad(t: float) -> float:
    """Accelerate from zero velocity."""
    return t * t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """CSS ``ease-out`` approximation used for items appearing."""
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN_QUAD: ease_in_quad,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_IN_CUBIC: ease_in_cubic,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name (e.g. ``"ease_out_cubic"``).

    Raises:
        ValueError: If the easing name is not recognized
    """
    if isinstance(easing, str):
        try:
            easing = Easing[easing.upper()]
        except KeyError:
            raise ValueError(f"Unknown easing function: {easing}") from None
    return _EASING_FUNCTIONS[easing]


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values, clamping t to [0, 1] before easing."""
    eased_t = get_easing(easing)(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t
