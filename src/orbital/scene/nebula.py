"""Nebula backdrop: a few large, faint radial gradients that barely follow the camera."""

from typing import Sequence
import math

from orbital.config.theme import NebulaCloud
from orbital.core.camera import CameraPose
from orbital.graphics.primitives import Buffer, GradientStop, draw_radial_gradient, hex_to_rgb

NEBULA_PARALLAX = 0.05
NEBULA_ROTATION = 0.02


def cloud_stops(cloud: NebulaCloud) -> list[GradientStop]:
    """Gradient stops for one cloud: inner color, outer color, fade out."""
    inner = hex_to_rgb(cloud.colors[0])
    outer = hex_to_rgb(cloud.colors[1])
    op = cloud.opacity
    return [
        (0.0, inner, op),
        (0.4, outer, op * 0.7),
        (0.7, inner, op * 0.3),
        (1.0, inner, 0.0),
    ]


def cloud_center(
    cloud: NebulaCloud,
    pose: CameraPose,
    width: int,
    height: int,
    parallax: float = NEBULA_PARALLAX,
    rotation: float = NEBULA_ROTATION,
) -> tuple[float, float]:
    """Screen position of a cloud under the nebula's low-sensitivity transform."""
    cx, cy = width / 2, height / 2
    theta = math.radians(pose.rotation * rotation)
    dx = cloud.offset[0] - pose.x * parallax
    dy = cloud.offset[1] - pose.y * parallax
    return (
        cx + dx * math.cos(theta) - dy * math.sin(theta),
        cy + dx * math.sin(theta) + dy * math.cos(theta),
    )


def draw_nebula(
    buffer: Buffer,
    clouds: Sequence[NebulaCloud],
    pose: CameraPose,
    parallax: float = NEBULA_PARALLAX,
    rotation: float = NEBULA_ROTATION,
) -> None:
    """Composite every cloud over the buffer."""
    height, width = buffer.shape[:2]
    for cloud in clouds:
        x, y = cloud_center(cloud, pose, width, height, parallax, rotation)
        draw_radial_gradient(buffer, x, y, cloud.radius, cloud_stops(cloud))
