"""
Deterministic parallax star layers.

Stars are generated from a stateless hash of ``(layer, index, salt)`` rather
than a stateful random generator, so regenerating a field for the same
viewport size always yields the same stars in the same order.
"""

from dataclasses import dataclass, field
from typing import Sequence
import logging
import math

logger = logging.getLogger(__name__)

_MASK64 = 0xFFFFFFFFFFFFFFFF

# Per-star hash salts, one per generated field
SALT_OPACITY = 1
SALT_X = 2
SALT_Y = 3
SALT_SIZE = 4
SALT_TWINKLE = 5
SALT_COLOR = 6

DEFAULT_PALETTE = ("#fcdfd4", "#ff9952", "#ff7684", "#ff6bca", "#f3a0c0", "#9b79b9")


def _splitmix64(value: int) -> int:
    z = (value + 0x9E3779B97F4A7C15) & _MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK64
    return z ^ (z >> 31)


def seeded_unit(layer: int, index: int, salt: int) -> float:
    """Map ``(layer, index, salt)`` to a float in [0, 1).

    The key ``layer * 10000 + index * 100 + salt`` is passed through one
    splitmix64 round; the top 53 bits become the mantissa.
    """
    key = (layer * 10000 + index * 100 + salt) & _MASK64
    return (_splitmix64(key) >> 11) / float(1 << 53)


@dataclass
class Star:
    """A point light. Only ``opacity`` changes after generation."""
    x: float
    y: float
    size: float
    base_opacity: float
    opacity: float
    twinkle_speed: float  # radians per ms
    color: str


@dataclass(frozen=True)
class LayerSpec:
    """Static description of one parallax layer."""
    name: str
    depth: float
    parallax_factor: float
    rotation_factor: float
    star_count: int
    size_range: tuple[float, float]
    opacity_range: tuple[float, float]


# Ordered back to front
LAYER_SPECS: tuple[LayerSpec, ...] = (
    LayerSpec("background", -1000.0, 0.1, 0.05, 60, (0.3, 1.0), (0.2, 0.4)),
    LayerSpec("far", -500.0, 0.3, 0.15, 80, (0.5, 1.5), (0.3, 0.6)),
    LayerSpec("mid", -200.0, 0.7, 0.4, 100, (0.8, 2.5), (0.4, 0.8)),
    LayerSpec("near", -50.0, 1.0, 0.8, 40, (1.5, 4.0), (0.5, 0.9)),
)


@dataclass
class ParallaxLayer:
    """A named group of stars sharing one camera sensitivity."""
    name: str
    depth: float
    parallax_factor: float
    rotation_factor: float
    stars: list[Star] = field(default_factory=list)

    def offset(self, cam_x: float, cam_y: float) -> tuple[float, float]:
        """Layer translation for a camera position."""
        return cam_x * self.parallax_factor, cam_y * self.parallax_factor

    def transform(
        self,
        x: float,
        y: float,
        cam_x: float,
        cam_y: float,
        cam_rotation: float,
        center: tuple[float, float],
    ) -> tuple[float, float]:
        """Map a star position to screen space.

        The layer is translated by ``-parallax * (cam_x, cam_y)`` and rotated
        about the viewport center by ``rotation_factor * cam_rotation``
        degrees.
        """
        off_x, off_y = self.offset(cam_x, cam_y)
        theta = math.radians(cam_rotation * self.rotation_factor)
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        dx = x - off_x - center[0]
        dy = y - off_y - center[1]
        return (
            center[0] + dx * cos_t - dy * sin_t,
            center[1] + dx * sin_t + dy * cos_t,
        )


def generate_layer(
    layer_index: int,
    spec: LayerSpec,
    width: int,
    height: int,
    palette: Sequence[str] = DEFAULT_PALETTE,
    expansion: float = 1.5,
) -> ParallaxLayer:
    """Generate one layer's stars over an expanded, centered field.

    Args:
        layer_index: Position of the layer in the stack, part of the hash key
        spec: Layer constants
        width, height: Viewport size in pixels
        palette: Hex colors to pick star colors from
        expansion: Field size relative to the viewport

    Returns:
        Populated layer
    """
    if not palette:
        raise ValueError("Star palette must not be empty")

    field_w = width * expansion
    field_h = height * expansion
    origin_x = -(field_w - width) / 2
    origin_y = -(field_h - height) / 2
    min_size, max_size = spec.size_range
    min_op, max_op = spec.opacity_range

    stars = []
    for i in range(spec.star_count):
        base_opacity = seeded_unit(layer_index, i, SALT_OPACITY) * (max_op - min_op) + min_op
        color_idx = int(seeded_unit(layer_index, i, SALT_COLOR) * len(palette))
        stars.append(Star(
            x=origin_x + seeded_unit(layer_index, i, SALT_X) * field_w,
            y=origin_y + seeded_unit(layer_index, i, SALT_Y) * field_h,
            size=seeded_unit(layer_index, i, SALT_SIZE) * (max_size - min_size) + min_size,
            base_opacity=base_opacity,
            opacity=base_opacity,
            twinkle_speed=seeded_unit(layer_index, i, SALT_TWINKLE) * 0.003 + 0.0005,
            color=palette[min(color_idx, len(palette) - 1)],
        ))

    return ParallaxLayer(
        name=spec.name,
        depth=spec.depth,
        parallax_factor=spec.parallax_factor,
        rotation_factor=spec.rotation_factor,
        stars=stars,
    )


def generate_layers(
    width: int,
    height: int,
    palette: Sequence[str] = DEFAULT_PALETTE,
    specs: Sequence[LayerSpec] = LAYER_SPECS,
    expansion: float = 1.5,
) -> list[ParallaxLayer]:
    """Generate every layer, back to front."""
    layers = [
        generate_layer(i, spec, width, height, palette, expansion)
        for i, spec in enumerate(specs)
    ]
    logger.debug(
        f"Generated {sum(len(l.stars) for l in layers)} stars "
        f"in {len(layers)} layers for {width}x{height}"
    )
    return layers


@dataclass(frozen=True)
class TwinkleProfile:
    """Sinusoidal opacity variation around each star's base opacity."""
    name: str
    amplitude: float
    min_opacity: float = 0.1
    max_opacity: float = 1.0

    def opacity(self, star: Star, elapsed_ms: float) -> float:
        value = star.base_opacity + math.sin(elapsed_ms * star.twinkle_speed) * self.amplitude
        return max(self.min_opacity, min(self.max_opacity, value))


TWINKLE_PROFILES: dict[str, TwinkleProfile] = {
    "enhanced": TwinkleProfile("enhanced", amplitude=0.15),
    "tranquil": TwinkleProfile("tranquil", amplitude=0.3),
}


def get_twinkle_profile(name: str) -> TwinkleProfile:
    """Look up a twinkle variant by name.

    Raises:
        ValueError: If the variant is unknown
    """
    try:
        return TWINKLE_PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown twinkle variant {name!r}, expected one of {sorted(TWINKLE_PROFILES)}"
        ) from None
