"""
State machine for the radial menu's open/close animation.

States:
    CLOSED: Nothing rendered, waiting for an open request
    OPENING: Items are animating in
    OPEN: All items visible, hover previews active
    CLOSING: Items are animating out

Transitions only flow CLOSED -> OPENING -> OPEN -> CLOSING -> CLOSED, except
that a close request during OPENING goes straight to CLOSING.
"""

from enum import Enum
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class MenuAnimationState(Enum):
    """Menu lifecycle states."""
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"

    @property
    def is_visible(self) -> bool:
        """True whenever any part of the menu is on screen."""
        return self is not MenuAnimationState.CLOSED


StateListener = Callable[[MenuAnimationState, MenuAnimationState], None]


class MenuStateMachine:
    """
    Tracks the menu animation state and enforces valid transitions.

    Listeners are notified after every successful transition; a listener that
    raises is logged and skipped.
    """

    VALID_TRANSITIONS: list[tuple[MenuAnimationState, MenuAnimationState]] = [
        (MenuAnimationState.CLOSED, MenuAnimationState.OPENING),
        (MenuAnimationState.OPENING, MenuAnimationState.OPEN),
        (MenuAnimationState.OPENING, MenuAnimationState.CLOSING),  # Interrupted open
        (MenuAnimationState.OPEN, MenuAnimationState.CLOSING),
        (MenuAnimationState.CLOSING, MenuAnimationState.CLOSED),
    ]

    def __init__(self, initial_state: MenuAnimationState = MenuAnimationState.CLOSED) -> None:
        self._state = initial_state
        self._listeners: list[StateListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"MenuStateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> MenuAnimationState:
        """Get current state."""
        return self._state

    def can_transition(self, to_state: MenuAnimationState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: MenuAnimationState) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid menu transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        logger.info(f"Menu state: {old_state.name} -> {to_state.name}")

        for listener in list(self._listeners):
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"Error in menu state listener: {e}")

        return True

    def add_listener(self, callback: StateListener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Force the machine back to CLOSED without notifying listeners."""
        if self._state is not MenuAnimationState.CLOSED:
            logger.info(f"Menu state reset from {self._state.name}")
        self._state = MenuAnimationState.CLOSED
