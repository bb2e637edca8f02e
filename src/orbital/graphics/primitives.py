"""Drawing primitives for float RGB frame buffers.

Buffers are numpy arrays of shape (height, width, 3) holding linear 0.0-1.0
channel values. Every primitive composites "source over" with an alpha and
only touches the bounding box of the shape it draws.
"""

from typing import Optional, Sequence, Tuple
import math

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[float, float, float]
Buffer = NDArray[np.float32]
GradientStop = Tuple[float, Color, float]  # (offset, color, alpha)


def hex_to_rgb(hex_color: str) -> Color:
    """Convert ``#rrggbb`` to a 0.0-1.0 RGB tuple."""
    value = hex_color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb, got {hex_color!r}")
    return tuple(int(value[i:i + 2], 16) / 255.0 for i in (0, 2, 4))  # type: ignore[return-value]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black buffer."""
    return np.zeros((height, width, 3), dtype=np.float32)


def clear(buffer: Buffer, color: Color = (0.0, 0.0, 0.0)) -> None:
    """Clear buffer to a solid color."""
    buffer[:, :] = color


def to_uint8(buffer: Buffer) -> NDArray[np.uint8]:
    """Quantize a float buffer to 8-bit RGB."""
    return (np.clip(buffer, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def _region(
    buffer: Buffer, x0: float, y0: float, x1: float, y1: float
) -> Optional[Tuple[slice, slice, NDArray[np.float32], NDArray[np.float32]]]:
    """Clip a box to the buffer and return slices plus pixel-center grids."""
    h, w = buffer.shape[:2]
    ix0 = max(0, int(math.floor(x0)))
    iy0 = max(0, int(math.floor(y0)))
    ix1 = min(w, int(math.ceil(x1)) + 1)
    iy1 = min(h, int(math.ceil(y1)) + 1)
    if ix1 <= ix0 or iy1 <= iy0:
        return None
    ys, xs = np.mgrid[iy0:iy1, ix0:ix1].astype(np.float32)
    return slice(iy0, iy1), slice(ix0, ix1), xs + 0.5, ys + 0.5


def _composite(
    buffer: Buffer,
    rows: slice,
    cols: slice,
    rgb: NDArray[np.float32] | Color,
    alpha: NDArray[np.float32],
) -> None:
    """Blend ``rgb`` over the buffer region with per-pixel ``alpha``."""
    a = np.clip(alpha, 0.0, 1.0)[..., None]
    dst = buffer[rows, cols]
    buffer[rows, cols] = dst * (1.0 - a) + np.asarray(rgb, dtype=np.float32) * a


def draw_disc(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw an anti-aliased filled circle.

    Sub-pixel radii still produce a faint dot, so tiny background stars
    remain visible.
    """
    if radius <= 0 or alpha <= 0:
        return
    region = _region(buffer, cx - radius - 1, cy - radius - 1, cx + radius + 1, cy + radius + 1)
    if region is None:
        return
    rows, cols, xs, ys = region
    dist = np.hypot(xs - cx, ys - cy)
    coverage = np.clip(radius + 0.5 - dist, 0.0, 1.0)
    if radius < 0.5:
        coverage *= radius * 2.0
    _composite(buffer, rows, cols, color, coverage * alpha)


def draw_radial_gradient(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    stops: Sequence[GradientStop],
) -> None:
    """Fill a circle with a radial gradient.

    Args:
        buffer: Target buffer
        cx, cy: Gradient center
        radius: Outer radius; nothing is drawn beyond it
        stops: (offset, color, alpha) tuples with ascending offsets in [0, 1]
    """
    if radius <= 0 or not stops:
        return
    region = _region(buffer, cx - radius, cy - radius, cx + radius, cy + radius)
    if region is None:
        return
    rows, cols, xs, ys = region
    t = np.hypot(xs - cx, ys - cy) / radius
    inside = t <= 1.0

    offsets = np.array([s[0] for s in stops], dtype=np.float32)
    colors = np.array([s[1] for s in stops], dtype=np.float32)
    alphas = np.array([s[2] for s in stops], dtype=np.float32)

    alpha = np.interp(t, offsets, alphas).astype(np.float32)
    rgb = np.stack(
        [np.interp(t, offsets, colors[:, c]) for c in range(3)], axis=-1
    ).astype(np.float32)
    _composite(buffer, rows, cols, rgb, np.where(inside, alpha, 0.0))


def fill_radial_backdrop(
    buffer: Buffer,
    stops: Sequence[Tuple[float, Color]],
    aspect: bool = True,
) -> None:
    """Overwrite the buffer with an opaque radial gradient from its center.

    With ``aspect`` the gradient is an ellipse fitted to the buffer (CSS
    ``radial-gradient(ellipse at center, ...)``); offset 1.0 is the corner.
    """
    h, w = buffer.shape[:2]
    if h == 0 or w == 0:
        return
    ys, xs = np.mgrid[0:h, 0:w].astype(np.float32)
    dx = (xs + 0.5 - w / 2.0) / (w / 2.0 if aspect else max(w, h) / 2.0)
    dy = (ys + 0.5 - h / 2.0) / (h / 2.0 if aspect else max(w, h) / 2.0)
    t = np.hypot(dx, dy) / math.sqrt(2.0)

    offsets = np.array([s[0] for s in stops], dtype=np.float32)
    colors = np.array([s[1] for s in stops], dtype=np.float32)
    for c in range(3):
        buffer[:, :, c] = np.interp(t, offsets, colors[:, c])


def draw_line(
    buffer: Buffer,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    color: Color,
    alpha: float = 1.0,
    width: float = 1.0,
) -> None:
    """Draw an anti-aliased line segment.

    Coverage falls off linearly with distance from the segment, so widths
    below one pixel render as faint hairlines.
    """
    if alpha <= 0 or width <= 0:
        return
    pad = width + 1.0
    region = _region(
        buffer, min(x1, x2) - pad, min(y1, y2) - pad, max(x1, x2) + pad, max(y1, y2) + pad
    )
    if region is None:
        return
    rows, cols, xs, ys = region

    dx, dy = x2 - x1, y2 - y1
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        t = np.zeros_like(xs)
    else:
        t = np.clip(((xs - x1) * dx + (ys - y1) * dy) / length_sq, 0.0, 1.0)
    dist = np.hypot(xs - (x1 + t * dx), ys - (y1 + t * dy))

    half = width / 2.0
    coverage = np.clip(half + 0.5 - dist, 0.0, 1.0) * min(1.0, width)
    _composite(buffer, rows, cols, color, coverage * alpha)


def fill_annular_sector(
    buffer: Buffer,
    cx: float,
    cy: float,
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Fill the ring slice between two radii and two angles (radians).

    Angles follow screen convention: 0 points right, positive is clockwise
    (y grows downward). A span of 2*pi or more fills the whole ring.
    """
    if outer_radius <= inner_radius or alpha <= 0:
        return
    region = _region(
        buffer, cx - outer_radius, cy - outer_radius, cx + outer_radius, cy + outer_radius
    )
    if region is None:
        return
    rows, cols, xs, ys = region
    rx, ry = xs - cx, ys - cy
    dist = np.hypot(rx, ry)
    mask = (dist >= inner_radius) & (dist <= outer_radius)

    span = end_angle - start_angle
    if span < 2 * math.pi:
        rel = np.mod(np.arctan2(ry, rx) - start_angle, 2 * math.pi)
        mask &= rel <= span

    _composite(buffer, rows, cols, color, mask.astype(np.float32) * alpha)


def stroke_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    alpha: float = 1.0,
    width: float = 2.0,
) -> None:
    """Draw an anti-aliased circle outline."""
    if radius <= 0 or alpha <= 0:
        return
    pad = radius + width + 1
    region = _region(buffer, cx - pad, cy - pad, cx + pad, cy + pad)
    if region is None:
        return
    rows, cols, xs, ys = region
    ring = np.abs(np.hypot(xs - cx, ys - cy) - radius)
    coverage = np.clip(width / 2.0 + 0.5 - ring, 0.0, 1.0)
    _composite(buffer, rows, cols, color, coverage * alpha)


def draw_text(
    buffer: Buffer,
    text: str,
    x: float,
    y: float,
    color: Color,
    alpha: float = 1.0,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text with the built-in 3x5 bitmap font.

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    font = _FONT
    h, w = buffer.shape[:2]
    cursor_x = int(round(x))
    top = int(round(y))
    a = max(0.0, min(1.0, alpha))
    rgb = np.asarray(color, dtype=np.float32)

    for char in text:
        if char == " ":
            cursor_x += 4 * scale
            continue

        glyph = font.get(char.upper(), font["?"])
        for row_idx, row in enumerate(glyph):
            for col_idx, pixel in enumerate(row):
                if not pixel:
                    continue
                px0 = cursor_x + col_idx * scale
                py0 = top + row_idx * scale
                px1, py1 = min(w, px0 + scale), min(h, py0 + scale)
                px0, py0 = max(0, px0), max(0, py0)
                if px1 > px0 and py1 > py0:
                    block = buffer[py0:py1, px0:px1]
                    buffer[py0:py1, px0:px1] = block * (1.0 - a) + rgb * a

        cursor_x += (len(glyph[0]) + 1) * scale

    return text_size(text, scale)


def text_size(text: str, scale: int = 1) -> Tuple[int, int]:
    """Measure text drawn by :func:`draw_text`."""
    font = _FONT
    width = 0
    for char in text:
        if char == " ":
            width += 4 * scale
        else:
            width += (len(font.get(char.upper(), font["?"])[0]) + 1) * scale
    if text and text[-1] != " ":
        width -= scale
    return max(0, width), 5 * scale


_FONT = {
    'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
    'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
    'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
    'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
    'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
    'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
    'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
    'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
    'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
    'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
    'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
    'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
    'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
    'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
    'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
    'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
    'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
    'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
    'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
    'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
    'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
    'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
    '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
    '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
    '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
    '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
    '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
    '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
    '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
    '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
    '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
    '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
    '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
    '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
    '.': [[0,0,0], [0,0,0], [0,0,0], [0,0,0], [0,1,0]],
    ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
    '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
    '/': [[0,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,0]],
}
