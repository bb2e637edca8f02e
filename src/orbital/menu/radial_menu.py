"""
Radial (pie) navigation menu.

The menu owns its animation state machine and schedules the open and close
completions as cancellable deadlines on the shared clock. While fully open,
hovering an item nudges the camera toward that item's destination through
``CameraStateManager.preview_position``.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence
import logging
import math

from orbital.animation.easing import Easing, get_easing, interpolate
from orbital.config.theme import Theme
from orbital.core.camera import CameraStateManager
from orbital.core.routes import RouteTable
from orbital.core.scheduling import FrameClock, TimerHandle
from orbital.core.state import MenuAnimationState, MenuStateMachine
from orbital.graphics.primitives import (
    Buffer,
    draw_line,
    draw_text,
    fill_annular_sector,
    stroke_circle,
    text_size,
)
from orbital.menu.anchor import AnchorProvider, Point, resolve_anchor
from orbital.menu.geometry import (
    RING_WIDTH,
    HalfCircleDirection,
    MenuSegment,
    Orientation,
    hit_test,
    layout_segments,
)

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_INTENSITY = 0.25


@dataclass(frozen=True)
class RadialMenuItem:
    """A navigation target shown as one menu segment."""
    href: str
    label: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class MenuTimings:
    """Per-item animation durations and stagger delays in ms."""
    appear_ms: float = 270.0
    appear_stagger_ms: float = 50.0
    disappear_ms: float = 350.0
    disappear_stagger_ms: float = 60.0
    appear_easing: Easing | str = Easing.EASE_OUT_CUBIC
    disappear_easing: Easing | str = Easing.EASE_IN_QUAD

    def __post_init__(self) -> None:
        # Unknown names raise ValueError here
        get_easing(self.appear_easing)
        get_easing(self.disappear_easing)

    def open_duration(self, count: int) -> float:
        """Time from open request until the menu is fully open."""
        return self.appear_ms + self.appear_stagger_ms * count

    def close_duration(self, count: int) -> float:
        """Time from close request until the menu is fully closed."""
        return self.disappear_ms + self.disappear_stagger_ms * count


class RadialMenu:
    """
    Circular or half-circular navigation menu.

    Args:
        items: Menu entries, in input order
        camera: Camera receiving hover previews
        routes: Route table used to resolve hover preview poses
        clock: Clock for deadlines and animation timestamps
        on_close: Called exactly once each time the menu finishes closing
        on_navigate: Called with an item's href when it is clicked
        on_animation_state_change: Called with the new state after each transition
        hollow_radius: Inner radius kept free for the trigger icon
        anchor: Provider of the menu center, measured on open
        orientation: Full-circle layout mode (auto, vertical, triangle, cardinal, ordinal)
        half_circle: Direction for half-circle mode, or None for a full circle
        ring_width: Outer radius minus hollow radius
        preview_intensity: Blend used for hover previews
        timings: Animation durations
        theme: Colors for drawing

    Raises:
        ValueError: On a negative hollow radius or unknown orientation/direction
    """

    def __init__(
        self,
        items: Sequence[RadialMenuItem],
        camera: CameraStateManager,
        routes: RouteTable,
        clock: FrameClock,
        on_close: Optional[Callable[[], None]] = None,
        on_navigate: Optional[Callable[[str], None]] = None,
        on_animation_state_change: Optional[Callable[[MenuAnimationState], None]] = None,
        hollow_radius: float = 80.0,
        anchor: Optional[AnchorProvider] = None,
        orientation: Orientation | str | None = None,
        half_circle: HalfCircleDirection | str | None = None,
        ring_width: float = RING_WIDTH,
        preview_intensity: float = DEFAULT_PREVIEW_INTENSITY,
        timings: MenuTimings | None = None,
        theme: Theme | None = None,
    ) -> None:
        self.items = tuple(items)
        self.camera = camera
        self.routes = routes
        self._clock = clock
        self.on_close = on_close
        self.on_navigate = on_navigate
        self.on_animation_state_change = on_animation_state_change
        self.hollow_radius = hollow_radius
        self.anchor = anchor
        self.orientation = Orientation.parse(orientation)
        self.half_circle = HalfCircleDirection.parse(half_circle)
        self.preview_intensity = preview_intensity
        self.timings = timings or MenuTimings()
        self.theme = theme or Theme()

        self.segments: list[MenuSegment] = layout_segments(
            len(self.items), hollow_radius, self.orientation, self.half_circle, ring_width
        )
        if not self.items:
            logger.warning("Radial menu created with no items, it will render nothing")

        self._machine = MenuStateMachine()
        self._machine.add_listener(self._on_state_change)
        self._timer: Optional[TimerHandle] = None
        self._hovered: Optional[int] = None
        self._center: Point = (0.0, 0.0)
        self._opened_at = 0.0
        self._closed_at = 0.0
        self._close_from: list[float] = []

    # Read accessors
    @property
    def state(self) -> MenuAnimationState:
        return self._machine.state

    @property
    def hovered(self) -> Optional[int]:
        """Index of the hovered item, if any."""
        return self._hovered

    @property
    def center(self) -> Point:
        """Anchor point measured when the menu last opened."""
        return self._center

    @property
    def outer_radius(self) -> float:
        return self.segments[0].outer_radius if self.segments else self.hollow_radius

    # Props
    def set_open(self, is_open: bool) -> None:
        """Apply the caller's ``isOpen`` prop."""
        state = self.state
        if is_open and state is MenuAnimationState.CLOSED:
            self._begin_open()
        elif not is_open and state in (MenuAnimationState.OPENING, MenuAnimationState.OPEN):
            self.request_close()
        elif is_open and state is MenuAnimationState.CLOSING:
            logger.debug("Open request ignored while menu is closing")

    def request_close(self) -> None:
        """Start the closing animation from OPENING or OPEN."""
        if self.state not in (MenuAnimationState.OPENING, MenuAnimationState.OPEN):
            return

        now = self._clock.now
        self._close_from = [self.item_progress(i, now) for i in range(len(self.items))]
        self._cancel_timer()
        self._clear_hover()

        if not self._machine.transition(MenuAnimationState.CLOSING):
            return
        self._closed_at = now
        self._timer = self._clock.call_later(
            self.timings.close_duration(len(self.items)), self._finish_close, name="menu-close"
        )

    # Input
    def pointer_move(self, x: float, y: float) -> None:
        """Track hover from a pointer position in screen coordinates."""
        if not self.state.is_visible or self.state is MenuAnimationState.CLOSING:
            return

        index = self.item_at(x, y)
        if index == self._hovered:
            return
        self._hovered = index

        if self.state is MenuAnimationState.OPEN:
            self._update_preview()

    def click(self, x: float, y: float) -> Optional[str]:
        """Handle a click in screen coordinates.

        A click on an item emits its href and closes the menu; a click
        anywhere else just closes it.

        Returns:
            The selected href, or None
        """
        if self.state not in (MenuAnimationState.OPENING, MenuAnimationState.OPEN):
            return None

        index = self.item_at(x, y)
        href = self.items[index].href if index is not None else None

        # Drops the hover preview before the navigation retargets the camera
        self.request_close()

        if href is not None:
            logger.info(f"Radial menu selected {href}")
            if self.on_navigate is not None:
                try:
                    self.on_navigate(href)
                except Exception as e:
                    logger.error(f"Error in navigate callback: {e}")
        return href

    def key_press(self, key: str) -> bool:
        """Handle a key name. Returns True if the key was consumed."""
        if key == "Escape" and self.state in (MenuAnimationState.OPENING, MenuAnimationState.OPEN):
            self.request_close()
            return True
        return False

    def item_at(self, x: float, y: float) -> Optional[int]:
        """Item index under a screen point, or None."""
        return hit_test(self.segments, x - self._center[0], y - self._center[1])

    # Animation
    def item_progress(self, index: int, now: Optional[float] = None) -> float:
        """Visibility of one item in [0, 1] at time ``now``.

        Items animate in clockwise order from the top, regardless of their
        position in the input list.
        """
        if now is None:
            now = self._clock.now
        state = self.state
        if state is MenuAnimationState.CLOSED or not self.segments:
            return 0.0

        rank = self.segments[index].rank
        if state is MenuAnimationState.CLOSING:
            start = self._close_from[index] if index < len(self._close_from) else 1.0
            t = (now - self._closed_at - rank * self.timings.disappear_stagger_ms) / self.timings.disappear_ms
            return interpolate(start, 0.0, t, self.timings.disappear_easing)

        t = (now - self._opened_at - rank * self.timings.appear_stagger_ms) / self.timings.appear_ms
        return interpolate(0.0, 1.0, t, self.timings.appear_easing)

    def draw(self, buffer: Buffer, now: Optional[float] = None) -> None:
        """Composite the menu over ``buffer``."""
        if not self.state.is_visible or not self.segments:
            return
        if now is None:
            now = self._clock.now

        colors = self.theme.colors
        cx, cy = self._center
        progress = [self.item_progress(i, now) for i in range(len(self.segments))]

        stroke_circle(buffer, cx, cy, self.hollow_radius, colors.to_rgb("menu_ring"),
                      alpha=0.3 * max(progress), width=2.0)

        for segment, p in zip(self.segments, progress):
            if p <= 0.0:
                continue
            hovered = segment.index == self._hovered
            ring = segment.outer_radius - segment.hollow_radius
            outer = segment.hollow_radius + ring * (0.6 + 0.4 * p)

            fill_annular_sector(
                buffer, cx, cy, segment.hollow_radius, outer,
                math.radians(segment.start_angle), math.radians(segment.end_angle),
                colors.to_rgb("menu_hover" if hovered else "menu_segment"),
                alpha=(0.45 if hovered else 0.3) * p,
            )

            (x1, y1), (x2, y2) = segment.divider
            draw_line(buffer, cx + x1, cy + y1, cx + x2, cy + y2,
                      colors.to_rgb("menu_divider"), alpha=0.3 * p, width=1.0)

            label = self.items[segment.index].label
            w, h = text_size(label, scale=2)
            lx, ly = segment.label_position
            draw_text(buffer, label, cx + lx - w / 2, cy + ly - h / 2,
                      colors.to_rgb("menu_label"), alpha=p, scale=2)

    def teardown(self) -> None:
        """Cancel pending deadlines and return to CLOSED without notifying."""
        self._cancel_timer()
        self._clear_hover()
        self._machine.reset()

    # Internal
    def _begin_open(self) -> None:
        self._center = resolve_anchor(self.anchor)
        if not self._machine.transition(MenuAnimationState.OPENING):
            return
        self._opened_at = self._clock.now
        self._timer = self._clock.call_later(
            self.timings.open_duration(len(self.items)), self._finish_open, name="menu-open"
        )

    def _finish_open(self) -> None:
        self._timer = None
        if self._machine.transition(MenuAnimationState.OPEN) and self._hovered is not None:
            self._update_preview()

    def _update_preview(self) -> None:
        if self._hovered is None:
            if self.camera.is_in_preview():
                self.camera.reset_preview()
        else:
            pose = self.routes.resolve(self.items[self._hovered].href)
            self.camera.preview_position(pose, self.preview_intensity)

    def _finish_close(self) -> None:
        self._timer = None
        self._close_from = []
        if not self._machine.transition(MenuAnimationState.CLOSED):
            return
        if self.on_close is not None:
            try:
                self.on_close()
            except Exception as e:
                logger.error(f"Error in close callback: {e}")

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _clear_hover(self) -> None:
        self._hovered = None
        if self.camera.is_in_preview():
            self.camera.reset_preview()

    def _on_state_change(self, old: MenuAnimationState, new: MenuAnimationState) -> None:
        if self.on_animation_state_change is not None:
            self.on_animation_state_change(new)
