"""Tests for the frame clock, frame schedulers and deadline timers."""

from orbital.core.scheduling import FrameClock, TimerQueue


class TestTimerQueue:
    """Deadline ordering and cancellation."""

    def test_fires_in_deadline_order(self):
        queue = TimerQueue()
        fired = []
        queue.schedule_at(30, lambda: fired.append("c"))
        queue.schedule_at(10, lambda: fired.append("a"))
        queue.schedule_at(20, lambda: fired.append("b"))

        assert queue.run_due(25) == 2
        assert fired == ["a", "b"]
        queue.run_due(30)
        assert fired == ["a", "b", "c"]

    def test_equal_deadlines_fire_in_schedule_order(self):
        queue = TimerQueue()
        fired = []
        queue.schedule_at(10, lambda: fired.append(1))
        queue.schedule_at(10, lambda: fired.append(2))
        queue.run_due(10)
        assert fired == [1, 2]

    def test_cancelled_timer_does_not_fire(self):
        queue = TimerQueue()
        fired = []
        handle = queue.schedule_at(10, lambda: fired.append(1))
        handle.cancel()
        assert queue.run_due(100) == 0
        assert fired == []
        assert not handle.pending

    def test_cancel_after_fire_is_noop(self):
        queue = TimerQueue()
        handle = queue.schedule_at(0, lambda: None)
        queue.run_due(0)
        handle.cancel()
        assert handle.fired
        assert not handle.cancelled

    def test_next_deadline_skips_cancelled(self):
        queue = TimerQueue()
        queue.schedule_at(5, lambda: None).cancel()
        queue.schedule_at(8, lambda: None)
        assert queue.next_deadline() == 8
        assert queue.pending_count == 1


class TestFrameClock:
    """Frame ticks drive timers first, then schedulers in order."""

    def test_call_later_uses_current_time(self):
        clock = FrameClock(start_ms=100.0)
        handle = clock.call_later(50, lambda: None)
        assert handle.deadline == 150.0

    def test_timers_fire_before_schedulers(self):
        clock = FrameClock()
        order = []
        sched = clock.scheduler("frames")
        sched.start(lambda now: order.append(("frame", now)))
        clock.call_later(10, lambda: order.append(("timer", clock.now)))

        clock.advance(10)
        assert order == [("timer", 10), ("frame", 10)]

    def test_schedulers_fire_in_registration_order(self):
        clock = FrameClock()
        order = []
        first = clock.scheduler("first")
        second = clock.scheduler("second")
        second.start(lambda now: order.append("second"))
        first.start(lambda now: order.append("first"))
        clock.advance(16)
        assert order == ["first", "second"]

    def test_stopped_scheduler_is_not_called(self):
        clock = FrameClock()
        calls = []
        sched = clock.scheduler()
        sched.start(calls.append)
        clock.advance(1)
        sched.stop()
        clock.advance(1)
        assert calls == [1]
        assert not sched.running

    def test_time_never_goes_backwards(self):
        clock = FrameClock(start_ms=500.0)
        clock.tick(100.0)
        assert clock.now == 500.0

    def test_run_frames_counts_frames(self):
        clock = FrameClock()
        clock.run_frames(60)
        assert clock.frame_count == 60
        assert abs(clock.now - 1000.0) < 1e-6

    def test_shutdown_cancels_everything(self):
        clock = FrameClock()
        fired = []
        sched = clock.scheduler()
        sched.start(lambda now: fired.append("frame"))
        clock.call_later(10, lambda: fired.append("timer"))

        clock.shutdown()
        clock.advance(100)
        assert fired == []
        assert clock.timers.pending_count == 0
