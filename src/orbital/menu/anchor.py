"""Anchor providers: where on screen the radial menu is centered."""

from typing import Callable, Optional, Protocol, runtime_checkable
import logging

logger = logging.getLogger(__name__)

Point = tuple[float, float]

ORIGIN: Point = (0.0, 0.0)


@runtime_checkable
class AnchorProvider(Protocol):
    """Anything that can report a screen coordinate, or None if it cannot."""

    def measure(self) -> Optional[Point]:
        ...


class FixedAnchor:
    """Anchor at a constant screen point."""

    def __init__(self, x: float, y: float) -> None:
        self.point = (float(x), float(y))

    def measure(self) -> Optional[Point]:
        return self.point


class CallableAnchor:
    """Anchor measured by calling a function, e.g. the trigger icon's center."""

    def __init__(self, func: Callable[[], Optional[Point]]) -> None:
        self._func = func

    def measure(self) -> Optional[Point]:
        return self._func()


def resolve_anchor(provider: Optional[AnchorProvider]) -> Point:
    """Measure an anchor, falling back to the viewport origin.

    A missing provider, a provider returning None or one that raises all
    degrade to ``(0, 0)``.
    """
    if provider is None:
        logger.warning("No menu anchor supplied, using viewport origin")
        return ORIGIN
    try:
        point = provider.measure()
    except Exception as e:
        logger.warning(f"Menu anchor measurement failed ({e}), using viewport origin")
        return ORIGIN
    if point is None:
        logger.warning("Menu anchor unavailable, using viewport origin")
        return ORIGIN
    return float(point[0]), float(point[1])
