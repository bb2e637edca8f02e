"""
Radial menu geometry.

Angles are in degrees in screen convention: 0 points right, 90 points down,
-90 points up, and positive rotation is clockwise. Each item owns an annular
sector between the hollow radius and ``hollow + ring_width``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence
import logging
import math

logger = logging.getLogger(__name__)

RING_WIDTH = 80.0
LABEL_OFFSET = 40.0


class Orientation(Enum):
    """How mid-angles are assigned around a full circle."""
    AUTO = "auto"
    VERTICAL = "vertical"    # top and bottom
    TRIANGLE = "triangle"    # top, bottom-left, bottom-right
    CARDINAL = "cardinal"    # evenly spaced from the top
    ORDINAL = "ordinal"      # evenly spaced from the top-right diagonal

    @classmethod
    def parse(cls, value: "Orientation | str | None") -> "Orientation":
        if value is None:
            return cls.AUTO
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown menu orientation: {value!r}") from None


class HalfCircleDirection(Enum):
    """Which way a half-circle menu opens."""
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @property
    def center_angle(self) -> float:
        return _DIRECTION_ANGLES[self]

    @classmethod
    def parse(cls, value: "HalfCircleDirection | str | None") -> Optional["HalfCircleDirection"]:
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Invalid half-circle direction: {value!r}") from None


_DIRECTION_ANGLES = {
    HalfCircleDirection.BOTTOM: 90.0,
    HalfCircleDirection.TOP: -90.0,
    HalfCircleDirection.LEFT: 180.0,
    HalfCircleDirection.RIGHT: 0.0,
}


def resolve_orientation(count: int, orientation: Orientation | str | None = None) -> Orientation:
    """Pick the layout for a full-circle menu.

    ``AUTO`` chooses by item count: 2 -> vertical, 3 -> triangle, otherwise
    cardinal for even counts and ordinal for odd ones. A single item uses
    cardinal so it sits at the top.
    """
    orientation = Orientation.parse(orientation)
    if orientation is not Orientation.AUTO:
        return orientation
    if count == 2:
        return Orientation.VERTICAL
    if count == 3:
        return Orientation.TRIANGLE
    if count <= 1 or count % 2 == 0:
        return Orientation.CARDINAL
    return Orientation.ORDINAL


def segment_angle(count: int, half_circle: bool = False) -> float:
    """Angular width of one item's segment; 0 for an empty menu."""
    if count <= 0:
        return 0.0
    return (180.0 if half_circle else 360.0) / count


def mid_angles(
    count: int,
    orientation: Orientation | str | None = None,
    half_circle: HalfCircleDirection | str | None = None,
) -> list[float]:
    """Mid-angle of every item, in input order."""
    if count <= 0:
        return []

    direction = HalfCircleDirection.parse(half_circle)
    seg = segment_angle(count, direction is not None)

    if direction is not None:
        span = seg * (count - 1)
        start = direction.center_angle - span / 2
        return [start + i * seg for i in range(count)]

    mode = resolve_orientation(count, orientation)
    fallback = [i * seg - 90.0 for i in range(count)]

    if mode is Orientation.VERTICAL:
        return ([-90.0, 90.0] + fallback[2:])[:count]
    if mode is Orientation.TRIANGLE:
        return ([-90.0, 150.0, 30.0] + fallback[3:])[:count]
    if mode is Orientation.ORDINAL:
        return [a + 45.0 for a in fallback]
    return fallback


def normalize_clockwise(angle: float) -> float:
    """Clockwise distance from the top, in [0, 360)."""
    return (angle + 90.0) % 360.0


def clockwise_ranks(angles: Sequence[float]) -> list[int]:
    """Rank of each angle in clockwise order starting at the top.

    Ties keep input order, so the result is always a permutation.
    """
    order = sorted(range(len(angles)), key=lambda i: (normalize_clockwise(angles[i]), i))
    ranks = [0] * len(angles)
    for rank, index in enumerate(order):
        ranks[index] = rank
    return ranks


def _polar(angle_deg: float, radius: float) -> tuple[float, float]:
    rad = math.radians(angle_deg)
    return math.cos(rad) * radius, math.sin(rad) * radius


def _fmt(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


@dataclass(frozen=True)
class MenuSegment:
    """Geometry of one item's sector, relative to the menu anchor."""
    index: int
    mid_angle: float
    sweep: float
    hollow_radius: float
    outer_radius: float
    rank: int = 0

    @property
    def start_angle(self) -> float:
        return self.mid_angle - self.sweep / 2

    @property
    def end_angle(self) -> float:
        return self.mid_angle + self.sweep / 2

    @property
    def large_arc(self) -> bool:
        """Whether the sector needs the SVG large-arc flag."""
        return self.sweep > 180.0

    @property
    def label_position(self) -> tuple[float, float]:
        return _polar(self.mid_angle, self.hollow_radius + LABEL_OFFSET)

    @property
    def divider(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Line along the start boundary from the hollow edge outward."""
        return (
            _polar(self.start_angle, self.hollow_radius),
            _polar(self.start_angle, self.outer_radius),
        )

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point relative to the anchor lies in the sector."""
        dist = math.hypot(x, y)
        if dist < self.hollow_radius or dist > self.outer_radius:
            return False
        if self.sweep >= 360.0:
            return True
        rel = (math.degrees(math.atan2(y, x)) - self.start_angle) % 360.0
        return rel <= self.sweep

    def svg_path(self) -> str:
        """Closed SVG path outlining the sector.

        A full ring is written as two half arcs per edge, since SVG drops an
        arc whose endpoints coincide.
        """
        if self.sweep >= 360.0:
            return self._ring_path()
        x1, y1 = _polar(self.start_angle, self.hollow_radius)
        x2, y2 = _polar(self.end_angle, self.hollow_radius)
        x3, y3 = _polar(self.end_angle, self.outer_radius)
        x4, y4 = _polar(self.start_angle, self.outer_radius)
        flag = 1 if self.large_arc else 0
        rh, ro = _fmt(self.hollow_radius), _fmt(self.outer_radius)
        return (
            f"M {_fmt(x1)} {_fmt(y1)} "
            f"A {rh} {rh} 0 {flag} 1 {_fmt(x2)} {_fmt(y2)} "
            f"L {_fmt(x3)} {_fmt(y3)} "
            f"A {ro} {ro} 0 {flag} 0 {_fmt(x4)} {_fmt(y4)} Z"
        )

    def _ring_path(self) -> str:
        half = self.start_angle + 180.0
        ix1, iy1 = _polar(self.start_angle, self.hollow_radius)
        ix2, iy2 = _polar(half, self.hollow_radius)
        ox1, oy1 = _polar(self.start_angle, self.outer_radius)
        ox2, oy2 = _polar(half, self.outer_radius)
        rh, ro = _fmt(self.hollow_radius), _fmt(self.outer_radius)
        return (
            f"M {_fmt(ix1)} {_fmt(iy1)} "
            f"A {rh} {rh} 0 0 1 {_fmt(ix2)} {_fmt(iy2)} "
            f"A {rh} {rh} 0 0 1 {_fmt(ix1)} {_fmt(iy1)} "
            f"L {_fmt(ox1)} {_fmt(oy1)} "
            f"A {ro} {ro} 0 0 0 {_fmt(ox2)} {_fmt(oy2)} "
            f"A {ro} {ro} 0 0 0 {_fmt(ox1)} {_fmt(oy1)} Z"
        )


def layout_segments(
    count: int,
    hollow_radius: float,
    orientation: Orientation | str | None = None,
    half_circle: HalfCircleDirection | str | None = None,
    ring_width: float = RING_WIDTH,
) -> list[MenuSegment]:
    """
    Lay out ``count`` segments around the anchor.

    Args:
        count: Number of menu items
        hollow_radius: Inner radius kept empty for the trigger icon
        orientation: Full-circle layout mode, ignored in half-circle mode
        half_circle: Direction of a half-circle menu, or None for full circle
        ring_width: Distance from hollow radius to outer radius

    Returns:
        One segment per item in input order, empty for ``count == 0``

    Raises:
        ValueError: On a negative hollow radius or unknown mode names
    """
    if hollow_radius < 0:
        raise ValueError(f"hollow_radius must be >= 0, got {hollow_radius}")
    if count <= 0:
        return []

    direction = HalfCircleDirection.parse(half_circle)
    sweep = segment_angle(count, direction is not None)
    angles = mid_angles(count, orientation, direction)
    ranks = clockwise_ranks(angles)
    outer = hollow_radius + ring_width

    return [
        MenuSegment(i, angle, sweep, hollow_radius, outer, ranks[i])
        for i, angle in enumerate(angles)
    ]


def hit_test(segments: Sequence[MenuSegment], x: float, y: float) -> Optional[int]:
    """Index of the segment containing ``(x, y)`` (anchor-relative), or None."""
    for segment in segments:
        if segment.contains(x, y):
            return segment.index
    return None
