"""
Parallax scene renderer.

Redraws the backdrop, the nebula and every star layer once per frame using
the camera's current pose. The renderer only reads the camera; it never
writes to it.
"""

from typing import Callable, Optional, Sequence
import logging

from orbital.config.theme import Theme
from orbital.core.camera import CameraStateManager
from orbital.core.scheduling import FrameClock, FrameScheduler
from orbital.graphics.primitives import (
    Buffer,
    draw_disc,
    draw_line,
    draw_radial_gradient,
    fill_radial_backdrop,
    hex_to_rgb,
    new_buffer,
)
from orbital.graphics.surface import RenderSurface, SurfaceUnavailableError
from orbital.scene.nebula import NEBULA_PARALLAX, NEBULA_ROTATION, draw_nebula
from orbital.scene.starfield import (
    LAYER_SPECS,
    LayerSpec,
    ParallaxLayer,
    Star,
    TwinkleProfile,
    generate_layers,
    get_twinkle_profile,
)

logger = logging.getLogger(__name__)

Overlay = Callable[[Buffer, float], None]

GLOW_MIN_SIZE = 1.0
SPARKLE_MIN_SIZE = 2.5
SPARKLE_MIN_OPACITY = 0.7


class ParallaxRenderer:
    """
    Draws the layered starfield behind page content.

    Args:
        camera: Camera whose pose is read every frame
        clock: Clock used for the frame scheduler and frame timestamps
        theme: Colors for the backdrop, stars and nebula
        twinkle: Twinkle variant name ("enhanced" or "tranquil")
        cull_margin: Pixels beyond the viewport a star may sit and still be drawn
        expansion: Star field size relative to the viewport
        frames: Frame scheduler override; defaults to one from ``clock``
    """

    def __init__(
        self,
        camera: CameraStateManager,
        clock: FrameClock,
        theme: Theme | None = None,
        twinkle: str = "enhanced",
        cull_margin: float = 100.0,
        expansion: float = 1.5,
        nebula_parallax: float = NEBULA_PARALLAX,
        nebula_rotation: float = NEBULA_ROTATION,
        layer_specs: Sequence[LayerSpec] = LAYER_SPECS,
        frames: FrameScheduler | None = None,
    ) -> None:
        self.camera = camera
        self._clock = clock
        self._frames = frames or clock.scheduler("parallax")
        self.theme = theme or Theme()
        self.twinkle: TwinkleProfile = get_twinkle_profile(twinkle)
        self.cull_margin = cull_margin
        self.expansion = expansion
        self.nebula_parallax = nebula_parallax
        self.nebula_rotation = nebula_rotation
        self.layer_specs = tuple(layer_specs)

        self.layers: list[ParallaxLayer] = []
        self.surface: Optional[RenderSurface] = None
        self.degraded = False
        self.stars_drawn = 0
        self._overlays: list[Overlay] = []
        self._size = (0, 0)
        self._start_ms = 0.0
        self._backdrop_stops = self.theme.colors.backdrop_stops()

    @property
    def mounted(self) -> bool:
        return self.surface is not None

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def mount(self, surface: RenderSurface) -> None:
        """Attach to a surface, generate layers and start drawing every frame."""
        if self.surface is not None:
            self.unmount()

        self.surface = surface
        self.degraded = False
        self._start_ms = self._clock.now
        self._regenerate(surface.width, surface.height)
        logger.info(f"Parallax renderer mounted at {surface.width}x{surface.height}")

        if self.draw_frame(self._clock.now):
            self._frames.start(self._on_frame)

    def unmount(self) -> None:
        """Stop drawing and release the surface."""
        self._frames.stop()
        self.surface = None
        self.layers = []
        logger.info("Parallax renderer unmounted")

    def resize(self, width: int, height: int) -> None:
        """Regenerate all layers for a new viewport and redraw once.

        Stars do not keep their positions across a resize.
        """
        if (width, height) == self._size:
            return
        self._regenerate(width, height)
        logger.info(f"Parallax layers regenerated for {width}x{height}")
        if self.surface is not None and not self.degraded:
            self.draw_frame(self._clock.now)

    def draw_frame(self, now_ms: float) -> bool:
        """Draw one frame into the mounted surface.

        Returns:
            False if the surface could not provide a buffer and the static
            backdrop was shown instead
        """
        if self.surface is None:
            return False

        try:
            buffer = self.surface.acquire()
        except SurfaceUnavailableError as e:
            self._fall_back(e)
            return False

        self.render(buffer, now_ms - self._start_ms)
        for overlay in self._overlays:
            overlay(buffer, now_ms)
        self.surface.present(buffer)
        return True

    def render(self, buffer: Buffer, elapsed_ms: float) -> None:
        """Draw the full scene into ``buffer`` for the given elapsed time."""
        pose = self.camera.get_pose()
        height, width = buffer.shape[:2]
        center = (width / 2, height / 2)

        fill_radial_backdrop(buffer, self._backdrop_stops)
        draw_nebula(buffer, self.theme.nebula, pose, self.nebula_parallax, self.nebula_rotation)

        margin = self.cull_margin
        drawn = 0
        for layer in self.layers:
            for star in layer.stars:
                sx, sy = layer.transform(star.x, star.y, pose.x, pose.y, pose.rotation, center)
                if sx < -margin or sx > width + margin or sy < -margin or sy > height + margin:
                    continue
                star.opacity = self.twinkle.opacity(star, elapsed_ms)
                self._draw_star(buffer, star, sx, sy)
                drawn += 1
        self.stars_drawn = drawn

    def add_overlay(self, overlay: Overlay) -> None:
        """Draw ``overlay(buffer, now_ms)`` on top of the scene every frame."""
        self._overlays.append(overlay)

    def remove_overlay(self, overlay: Overlay) -> None:
        if overlay in self._overlays:
            self._overlays.remove(overlay)

    def backdrop(self, width: int, height: int) -> Buffer:
        """The static gradient used when nothing else can be drawn."""
        buffer = new_buffer(width, height)
        fill_radial_backdrop(buffer, self._backdrop_stops)
        return buffer

    # Internal
    def _regenerate(self, width: int, height: int) -> None:
        self._size = (width, height)
        self.layers = generate_layers(
            width, height, self.theme.colors.star_palette, self.layer_specs, self.expansion
        )

    def _fall_back(self, error: Exception) -> None:
        self._frames.stop()
        if not self.degraded:
            logger.warning(f"Drawing surface unavailable ({error}), showing static backdrop")
        self.degraded = True
        width, height = self._size
        if width > 0 and height > 0:
            self.surface.present_static(self.backdrop(width, height))

    def _draw_star(self, buffer: Buffer, star: Star, x: float, y: float) -> None:
        rgb = hex_to_rgb(star.color)
        opacity = star.opacity

        if star.size > GLOW_MIN_SIZE:
            draw_radial_gradient(buffer, x, y, star.size * 3, [
                (0.0, rgb, opacity * 0.3),
                (0.5, rgb, opacity * 0.15),
                (1.0, rgb, 0.0),
            ])

        draw_disc(buffer, x, y, star.size, rgb, opacity)

        if star.size > SPARKLE_MIN_SIZE and opacity > SPARKLE_MIN_OPACITY:
            arm = star.size * 1.5
            alpha = opacity * 0.4
            draw_line(buffer, x - arm, y, x + arm, y, rgb, alpha, width=0.5)
            draw_line(buffer, x, y - arm, x, y + arm, rgb, alpha, width=0.5)

    def _on_frame(self, now_ms: float) -> None:
        self.draw_frame(now_ms)
