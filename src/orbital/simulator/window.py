"""
Desktop simulator window using pygame.

Mounts the orbital scene into a resizable window and translates pygame
input into scene calls.
"""

import asyncio
import logging
from typing import Optional

import numpy as np
import pygame

from orbital.config.settings import OrbitalSettings
from orbital.core.events import EventType
from orbital.graphics.primitives import Buffer, new_buffer, to_uint8
from orbital.graphics.surface import RenderSurface, SurfaceUnavailableError
from orbital.scene.shell import OrbitalScene

logger = logging.getLogger(__name__)

_KEY_NAMES = {
    pygame.K_ESCAPE: "Escape",
    pygame.K_SPACE: "Space",
    pygame.K_RETURN: "Enter",
    pygame.K_1: "1",
    pygame.K_2: "2",
    pygame.K_3: "3",
    pygame.K_4: "4",
}


class PygameSurface(RenderSurface):
    """Render surface backed by the pygame display."""

    def __init__(self) -> None:
        self._buffer: Optional[Buffer] = None

    @property
    def width(self) -> int:
        screen = pygame.display.get_surface()
        return screen.get_width() if screen else 0

    @property
    def height(self) -> int:
        screen = pygame.display.get_surface()
        return screen.get_height() if screen else 0

    def acquire(self) -> Buffer:
        screen = pygame.display.get_surface()
        if screen is None:
            raise SurfaceUnavailableError("pygame display is not initialized")
        size = (screen.get_height(), screen.get_width())
        if self._buffer is None or self._buffer.shape[:2] != size:
            self._buffer = new_buffer(size[1], size[0])
        return self._buffer

    def present(self, buffer: Buffer) -> None:
        screen = pygame.display.get_surface()
        if screen is None:
            return
        # surfarray is indexed [x, y]
        pygame.surfarray.blit_array(screen, np.ascontiguousarray(to_uint8(buffer).swapaxes(0, 1)))


class SimulatorWindow:
    """
    Simulator window driving an :class:`OrbitalScene`.

    Keyboard Mapping:
        SPACE / ENTER: Toggle the radial menu
        ESC: Close the menu, or exit when it is closed
        1-4: Jump to a route
        D: Toggle debug overlay
        L: Toggle log viewer
        S: Capture screenshot
    """

    def __init__(self, settings: OrbitalSettings, scene: OrbitalScene | None = None) -> None:
        self.settings = settings
        self.scene = scene or OrbitalScene(settings)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._surface = PygameSurface()
        self._running = False
        self._frame_count = 0
        self._show_debug = settings.debug
        self._font: pygame.font.Font | None = None

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 20

        self._setup_log_capture()
        self.scene.event_bus.subscribe(EventType.SHUTDOWN, lambda e: self.stop())

        logger.info("SimulatorWindow created")

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: "SimulatorWindow"):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        handler = SimulatorLogHandler(self)
        handler.setFormatter(logging.Formatter("%(levelname).1s %(name)s: %(message)s"))
        logging.getLogger().addHandler(handler)

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        config = self.settings.window
        pygame.display.set_caption(config.title)

        flags = pygame.DOUBLEBUF | pygame.RESIZABLE
        if config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode((config.width, config.height), flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 18)

        logger.info(f"Pygame initialized: {config.width}x{config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self.scene.resize(event.w, event.h)

            elif event.type == pygame.MOUSEMOTION:
                self.scene.pointer_move(*event.pos)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.scene.click(*event.pos)

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key == pygame.K_s:
            self._capture_screenshot()
        elif key in _KEY_NAMES:
            if not self.scene.key_press(_KEY_NAMES[key]):
                self._running = False

    def _render_panels(self) -> None:
        """Draw debug and log panels over the presented scene."""
        if not self._screen or not self._font:
            return

        if self._show_debug:
            pose = self.scene.camera.get_pose()
            lines = [
                f"route {self.scene.route}",
                f"pose x={pose.x:.1f} y={pose.y:.1f} z={pose.z:.1f} rot={pose.rotation:.1f}",
                f"transitioning={self.scene.camera.is_transitioning()} "
                f"preview={self.scene.camera.is_in_preview()}",
                f"menu {self.scene.menu.state.value}",
                f"stars {self.scene.renderer.stars_drawn}  fps {self._clock.get_fps():.0f}"
                if self._clock else "",
            ]
            y = self._screen.get_height() - 20 * len(lines) - 10
            for line in lines:
                self._screen.blit(self._font.render(line, True, (200, 200, 220)), (10, y))
                y += 20

        if self._show_log:
            x = self._screen.get_width() - 520
            y = 120
            for line in self._log_buffer[-self._max_log_lines:]:
                self._screen.blit(self._font.render(line[:80], True, (150, 150, 170)), (x, y))
                y += 16

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True
        self.scene.mount(self._surface)

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            self.scene.frame(float(pygame.time.get_ticks()))
            self._render_panels()
            pygame.display.flip()

            if self._clock:
                self._clock.tick(self.settings.window.fps)

            self._frame_count += 1

            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.scene.shutdown()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
