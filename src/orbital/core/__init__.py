"""Core framework components: clock, camera, routes, menu state, events."""

from .camera import CameraPose, CameraStateManager
from .events import Event, EventBus, EventType
from .routes import RouteTable, RouteTracker
from .scheduling import FrameClock, FrameScheduler, TimerHandle
from .state import MenuAnimationState, MenuStateMachine

__all__ = [
    "CameraPose",
    "CameraStateManager",
    "Event",
    "EventBus",
    "EventType",
    "FrameClock",
    "FrameScheduler",
    "MenuAnimationState",
    "MenuStateMachine",
    "RouteTable",
    "RouteTracker",
    "TimerHandle",
]
