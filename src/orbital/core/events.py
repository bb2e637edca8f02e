"""
Event bus for the orbital scene shell.

Carries navigation intents from the radial menu, route changes, menu state
notifications and window events between components. ``emit`` dispatches to
every subscribed handler immediately, on the caller's thread.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
from collections import defaultdict
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Navigation
    NAVIGATE = auto()          # Intent to go to data["href"]
    ROUTE_CHANGED = auto()

    # Menu
    MENU_STATE_CHANGED = auto()

    # Window
    RESIZE = auto()
    SHUTDOWN = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Monotonic time the event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """Central pub/sub hub shared by the scene components."""

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event to its handlers right away."""
        self._add_to_history(event)
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def _add_to_history(self, event: Event) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()


def navigate_event(href: str, source: str = "radial_menu") -> Event:
    """Create a navigation intent event."""
    return Event(EventType.NAVIGATE, data={"href": href}, source=source)


def menu_state_event(state: str, source: str = "radial_menu") -> Event:
    """Create a menu state notification event."""
    return Event(EventType.MENU_STATE_CHANGED, data={"state": state}, source=source)


def resize_event(width: int, height: int) -> Event:
    """Create a window resize event."""
    return Event(EventType.RESIZE, data={"width": width, "height": height}, source="window")
