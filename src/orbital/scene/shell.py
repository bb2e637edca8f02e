"""
Scene root.

Owns one camera, the route tracker, the parallax renderer and the current
page's radial menu, and wires them together through an event bus. The
simulator window feeds it input and timestamps; tests drive it headless.
"""

from typing import Optional
import logging

from orbital.config.settings import OrbitalSettings
from orbital.config.theme import Theme, load_theme
from orbital.core.camera import CameraStateManager
from orbital.core.events import Event, EventBus, EventType, menu_state_event, navigate_event, resize_event
from orbital.core.routes import HOME_ROUTE, RouteTable, RouteTracker, initial_pose
from orbital.core.scheduling import FrameClock
from orbital.core.state import MenuAnimationState
from orbital.graphics.primitives import Buffer, draw_text, stroke_circle, text_size
from orbital.graphics.surface import RenderSurface
from orbital.menu.anchor import CallableAnchor, Point
from orbital.menu.pages import PageMenu, page_menu
from orbital.menu.radial_menu import MenuTimings, RadialMenu
from orbital.scene.renderer import ParallaxRenderer

logger = logging.getLogger(__name__)

TRIGGER_RADIUS = 24.0
TRIGGER_TOP_OFFSET = 90.0


class OrbitalScene:
    """
    Layout shell: starfield behind page content, radial menu above it.

    Args:
        settings: Application settings
        theme: Scene theme; loaded from ``settings.theme`` when omitted
        routes: Route table; loaded from ``settings.routes_file`` or the
            built-in table when omitted
        clock: Shared frame clock
        event_bus: Shared event bus
        initial_route: Route the scene starts on
    """

    def __init__(
        self,
        settings: OrbitalSettings | None = None,
        theme: Theme | None = None,
        routes: RouteTable | None = None,
        clock: FrameClock | None = None,
        event_bus: EventBus | None = None,
        initial_route: str = HOME_ROUTE,
    ) -> None:
        self.settings = settings or OrbitalSettings()
        self.theme = theme or load_theme(self.settings.theme, self.settings.themes_path)
        if routes is None:
            routes = (
                RouteTable.from_yaml(self.settings.routes_file)
                if self.settings.routes_file
                else RouteTable()
            )
        self.routes = routes
        self.clock = clock or FrameClock()
        self.event_bus = event_bus or EventBus()

        cam = self.settings.camera
        self.camera = CameraStateManager(
            self.clock,
            initial=initial_pose(routes, initial_route),
            ease=cam.ease,
            threshold=cam.position_threshold,
            rotation_threshold=cam.rotation_threshold,
            transition_ms=cam.transition_ms,
        )
        self.tracker = RouteTracker(self.camera, routes, initial_route)

        scene = self.settings.scene
        self.renderer = ParallaxRenderer(
            self.camera,
            self.clock,
            theme=self.theme,
            twinkle=scene.twinkle,
            cull_margin=scene.cull_margin,
            expansion=scene.field_expansion,
            nebula_parallax=scene.nebula_parallax,
            nebula_rotation=scene.nebula_rotation,
        )
        self.renderer.add_overlay(self._draw_overlay)

        menu = self.settings.menu
        self._timings = MenuTimings(
            appear_ms=menu.appear_ms,
            appear_stagger_ms=menu.appear_stagger_ms,
            disappear_ms=menu.disappear_ms,
            disappear_stagger_ms=menu.disappear_stagger_ms,
            appear_easing=menu.appear_easing,
            disappear_easing=menu.disappear_easing,
        )

        self._size = (self.settings.window.width, self.settings.window.height)
        self._menu_open = False
        self.page: PageMenu = page_menu(initial_route)
        self.menu: RadialMenu = self._build_menu(self.page)

        self._unsubscribe = [
            self.event_bus.subscribe(EventType.NAVIGATE, self._on_navigate_event),
            self.event_bus.subscribe(EventType.RESIZE, self._on_resize_event),
        ]

    @property
    def route(self) -> str:
        return self.tracker.route

    @property
    def menu_open(self) -> bool:
        """The ``isOpen`` prop currently passed to the menu."""
        return self._menu_open

    # Lifecycle
    def mount(self, surface: RenderSurface) -> None:
        self._size = (surface.width, surface.height)
        self.renderer.mount(surface)

    def frame(self, now_ms: float) -> None:
        """Run one frame at an absolute timestamp."""
        self.clock.tick(now_ms)

    def shutdown(self) -> None:
        """Tear everything down; no callbacks fire afterwards."""
        self.menu.teardown()
        self.camera.teardown()
        self.renderer.unmount()
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self.clock.shutdown()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="scene"))
        logger.info("Scene shut down")

    # Navigation
    def navigate(self, route: str) -> None:
        """Switch to a route: retarget the camera and swap in that page's menu."""
        if route == self.tracker.route:
            logger.debug(f"Already on {route}")
            return
        # Old menu first, so its hover preview is gone before the retarget
        self.menu.teardown()
        self.tracker.navigate(route)
        self._menu_open = False
        self.page = page_menu(route)
        self.menu = self._build_menu(self.page)
        self.event_bus.emit(Event(EventType.ROUTE_CHANGED, data={"route": route}, source="scene"))

    def resize(self, width: int, height: int) -> None:
        self.event_bus.emit(resize_event(width, height))

    # Menu props
    def open_menu(self) -> None:
        self._menu_open = True
        self.menu.set_open(True)

    def close_menu(self) -> None:
        self._menu_open = False
        self.menu.set_open(False)

    def toggle_menu(self) -> None:
        if self.menu.state in (MenuAnimationState.OPENING, MenuAnimationState.OPEN):
            self.close_menu()
        elif self.menu.state is MenuAnimationState.CLOSED:
            self.open_menu()

    # Input
    def pointer_move(self, x: float, y: float) -> None:
        self.menu.pointer_move(x, y)

    def click(self, x: float, y: float) -> None:
        """Clicks on the trigger icon toggle the menu; others go to the menu."""
        if self.menu.state is MenuAnimationState.CLOSED:
            if self._on_trigger(x, y):
                self.open_menu()
            return
        self.menu.click(x, y)

    def key_press(self, key: str) -> bool:
        """Handle a key name.

        Returns:
            False if the key asks the application to quit
        """
        if key == "Escape":
            if self.menu.key_press(key):
                return True
            return self.menu.state is not MenuAnimationState.CLOSED
        if key in ("Space", "Enter"):
            self.toggle_menu()
        elif key.isdigit():
            routes = self.routes.routes
            index = int(key) - 1
            if 0 <= index < len(routes):
                self.event_bus.emit(navigate_event(routes[index], source="keyboard"))
        return True

    # Internal
    def trigger_point(self) -> Point:
        """Center of the menu trigger icon for the current page."""
        width, height = self._size
        if self.page.half_circle is None:
            return width / 2, height / 2
        return width / 2, TRIGGER_TOP_OFFSET

    def _on_trigger(self, x: float, y: float) -> bool:
        tx, ty = self.trigger_point()
        return (x - tx) ** 2 + (y - ty) ** 2 <= TRIGGER_RADIUS ** 2

    def _build_menu(self, page: PageMenu) -> RadialMenu:
        return RadialMenu(
            page.items,
            self.camera,
            self.routes,
            self.clock,
            on_close=self._on_menu_closed,
            on_navigate=lambda href: self.event_bus.emit(navigate_event(href)),
            on_animation_state_change=self._on_menu_state,
            hollow_radius=page.hollow_radius,
            anchor=CallableAnchor(self.trigger_point),
            half_circle=page.half_circle,
            ring_width=self.settings.menu.ring_width,
            preview_intensity=self.settings.camera.preview_intensity,
            timings=self._timings,
            theme=self.theme,
        )

    def _on_menu_closed(self) -> None:
        self._menu_open = False

    def _on_menu_state(self, state: MenuAnimationState) -> None:
        self.event_bus.emit(menu_state_event(state.value))

    def _on_navigate_event(self, event: Event) -> None:
        href = event.data.get("href")
        if href:
            self.navigate(href)

    def _on_resize_event(self, event: Event) -> None:
        width, height = event.data["width"], event.data["height"]
        self._size = (width, height)
        self.renderer.resize(width, height)

    def _draw_overlay(self, buffer: Buffer, now_ms: float) -> None:
        colors = self.theme.colors
        text_rgb = colors.to_rgb("panel_text")

        draw_text(buffer, self.page.title, 40, 40, text_rgb, alpha=0.9, scale=4)
        if self.page.subtitle:
            draw_text(buffer, self.page.subtitle, 40, 70, text_rgb, alpha=0.6, scale=2)
        route_w, _ = text_size(self.route, scale=2)
        draw_text(buffer, self.route, buffer.shape[1] - route_w - 40, 40, text_rgb, alpha=0.5, scale=2)

        tx, ty = self.trigger_point()
        stroke_circle(buffer, tx, ty, TRIGGER_RADIUS, colors.to_rgb("menu_ring"), alpha=0.8, width=2.0)

        self.menu.draw(buffer, now_ms)
