"""Frame and deadline scheduling.

All components run on a single thread. A :class:`FrameClock` owns the notion of
"now" (in milliseconds) and drives two kinds of work:

- per-frame callbacks registered through :class:`FrameScheduler` handles
- one-shot deferred callbacks held in a :class:`TimerQueue` as explicit deadlines

Nothing here sleeps. A real loop calls :meth:`FrameClock.tick` with a
monotonic timestamp; tests call :meth:`FrameClock.advance` instead.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional
import heapq
import itertools
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Per-frame callback registration (``start(callback)`` / ``stop()``)."""

    @abstractmethod
    def start(self, callback: FrameCallback) -> None:
        """Invoke ``callback(now_ms)`` once per frame until stopped."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Stop invoking the callback. Safe to call when already stopped."""
        ...

    @property
    @abstractmethod
    def running(self) -> bool:
        ...


class ManualFrameScheduler(FrameScheduler):
    """Frame scheduler fired explicitly by its owner via :meth:`fire`."""

    def __init__(self, name: str = "frame") -> None:
        self.name = name
        self._callback: Optional[FrameCallback] = None

    def start(self, callback: FrameCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def fire(self, now_ms: float) -> None:
        callback = self._callback
        if callback is not None:
            callback(now_ms)


@dataclass(order=True)
class TimerHandle:
    """A cancellable deferred callback with an explicit deadline."""

    deadline: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    name: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        """Cancel the callback. No effect once fired."""
        if not self.fired and not self.cancelled:
            self.cancelled = True
            logger.debug(f"Timer cancelled: {self.name or self.seq}")

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class TimerQueue:
    """Deadline-ordered queue of :class:`TimerHandle` objects."""

    def __init__(self) -> None:
        self._heap: List[TimerHandle] = []
        self._counter = itertools.count()

    def schedule_at(
        self, deadline: float, callback: Callable[[], None], name: str = ""
    ) -> TimerHandle:
        handle = TimerHandle(deadline, next(self._counter), callback, name)
        heapq.heappush(self._heap, handle)
        return handle

    def run_due(self, now_ms: float) -> int:
        """Fire every pending timer whose deadline is <= ``now_ms``.

        Timers scheduled by a firing callback are honoured in the same call
        if they are already due.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while self._heap and self._heap[0].deadline <= now_ms:
            handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for handle in self._heap:
            handle.cancel()
        self._heap.clear()

    @property
    def pending_count(self) -> int:
        return sum(1 for h in self._heap if h.pending)

    def next_deadline(self) -> Optional[float]:
        for handle in sorted(self._heap):
            if handle.pending:
                return handle.deadline
        return None


class FrameClock:
    """Single-threaded clock driving frame schedulers and deadline timers.

    Each tick first fires due timers, then every running frame scheduler in
    registration order (camera easing before the renderer, so the renderer
    reads a pose that is already up to date for this frame).
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._schedulers: List[ManualFrameScheduler] = []
        self.timers = TimerQueue()
        self.frame_count = 0

    @property
    def now(self) -> float:
        """Current time in milliseconds."""
        return self._now

    def scheduler(self, name: str = "frame") -> ManualFrameScheduler:
        """Create a frame scheduler driven by this clock."""
        sched = ManualFrameScheduler(name)
        self._schedulers.append(sched)
        return sched

    def call_later(
        self, delay_ms: float, callback: Callable[[], None], name: str = ""
    ) -> TimerHandle:
        """Schedule ``callback`` at ``now + delay_ms``."""
        return self.timers.schedule_at(self._now + max(0.0, delay_ms), callback, name)

    def tick(self, now_ms: float) -> None:
        """Advance to an absolute timestamp and run one frame."""
        if now_ms < self._now:
            logger.debug(f"Clock went backwards ({now_ms} < {self._now}), holding")
            now_ms = self._now
        self._now = now_ms
        self.timers.run_due(now_ms)
        for sched in list(self._schedulers):
            sched.fire(now_ms)
        self.frame_count += 1

    def advance(self, delta_ms: float) -> None:
        """Advance by ``delta_ms`` and run one frame."""
        self.tick(self._now + delta_ms)

    def run_frames(self, count: int, frame_ms: float = 1000.0 / 60.0) -> None:
        """Run ``count`` frames at a fixed interval (60 Hz by default)."""
        for _ in range(count):
            self.advance(frame_ms)

    def shutdown(self) -> None:
        """Stop every scheduler and cancel every pending timer."""
        for sched in self._schedulers:
            sched.stop()
        self.timers.cancel_all()
        logger.debug("FrameClock shut down")
