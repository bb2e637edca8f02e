"""Tests for the menu animation state machine."""

import logging

import pytest

from orbital.core.state import MenuAnimationState, MenuStateMachine

S = MenuAnimationState


class TestTransitions:

    def test_starts_closed(self):
        assert MenuStateMachine().state is S.CLOSED

    def test_full_cycle(self):
        machine = MenuStateMachine()
        for state in (S.OPENING, S.OPEN, S.CLOSING, S.CLOSED):
            assert machine.transition(state)
            assert machine.state is state

    def test_close_interrupts_opening(self):
        machine = MenuStateMachine()
        machine.transition(S.OPENING)
        assert machine.transition(S.CLOSING)

    @pytest.mark.parametrize("start, target", [
        (S.CLOSED, S.OPEN),
        (S.CLOSED, S.CLOSING),
        (S.OPENING, S.CLOSED),
        (S.OPEN, S.CLOSED),
        (S.OPEN, S.OPENING),
        (S.CLOSING, S.OPENING),
        (S.CLOSING, S.OPEN),
    ])
    def test_invalid_transitions_rejected(self, start, target, caplog):
        machine = MenuStateMachine(initial_state=start)
        with caplog.at_level(logging.WARNING):
            assert machine.transition(target) is False
        assert machine.state is start
        assert "Invalid menu transition" in caplog.text

    def test_visibility(self):
        assert not S.CLOSED.is_visible
        assert all(s.is_visible for s in (S.OPENING, S.OPEN, S.CLOSING))


class TestListeners:

    def test_listener_receives_old_and_new(self):
        machine = MenuStateMachine()
        seen = []
        machine.add_listener(lambda old, new: seen.append((old, new)))
        machine.transition(S.OPENING)
        assert seen == [(S.CLOSED, S.OPENING)]

    def test_listener_not_called_on_rejected_transition(self):
        machine = MenuStateMachine()
        seen = []
        machine.add_listener(lambda old, new: seen.append(new))
        machine.transition(S.OPEN)
        assert seen == []

    def test_failing_listener_does_not_block_transition(self, caplog):
        machine = MenuStateMachine()
        seen = []

        def boom(old, new):
            raise RuntimeError("bad listener")

        machine.add_listener(boom)
        machine.add_listener(lambda old, new: seen.append(new))
        with caplog.at_level(logging.ERROR):
            assert machine.transition(S.OPENING)
        assert seen == [S.OPENING]
        assert "bad listener" in caplog.text

    def test_reset_does_not_notify(self):
        machine = MenuStateMachine()
        machine.transition(S.OPENING)
        seen = []
        machine.add_listener(lambda old, new: seen.append(new))
        machine.reset()
        assert machine.state is S.CLOSED
        assert seen == []
