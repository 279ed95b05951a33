"""
Frame scheduler - "run once before the next repaint".

Game code never loops on its own. It requests a callback for the next frame
and, when that callback runs, requests the one after. The host owns the
real loop and calls ``run_frame()`` once per displayed frame, so stopping a
game is just cancelling its pending request.

Usage:
    scheduler = MonotonicFrameScheduler()

    def tick(now: float) -> None:
        ...
        handle = scheduler.request_frame(tick)

    handle = scheduler.request_frame(tick)
    while running:
        scheduler.run_frame()
        pygame.display.flip()

Tests use ManualFrameScheduler, which runs frames on a synthetic clock:
    scheduler = ManualFrameScheduler()
    scheduler.advance(1 / 60)
"""
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Per-frame callback queue with cancellable handles.

    Callbacks requested before a frame starts run in that frame, in request
    order, all receiving the same timestamp. Callbacks requested while a
    frame is running wait for the next frame. Cancelling a callback that is
    still waiting in the current frame prevents it from running.
    """

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._running_batch: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self._frame_count = 0

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds on this scheduler's clock."""
        pass

    @property
    def frame_count(self) -> int:
        """Number of frames run so far."""
        return self._frame_count

    @property
    def pending_count(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        """Run ``callback(now)`` on the next frame.

        Returns:
            Handle for cancel_frame()
        """
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Cancel a requested callback. Unknown or spent handles are ignored."""
        self._pending.pop(handle, None)
        self._running_batch.pop(handle, None)

    def run_frame(self) -> int:
        """Run every callback requested before this frame.

        Returns:
            Number of callbacks that ran
        """
        now = self.now()
        self._frame_count += 1
        self._running_batch = self._pending
        self._pending = {}

        ran = 0
        while self._running_batch:
            handle = next(iter(self._running_batch))
            callback = self._running_batch.pop(handle)
            callback(now)
            ran += 1
        return ran

    def clear(self) -> None:
        """Drop every pending callback."""
        self._pending.clear()
        self._running_batch.clear()


class MonotonicFrameScheduler(FrameScheduler):
    """Scheduler on the wall clock, driven by the host's display loop."""

    def now(self) -> float:
        return time.monotonic()


class ManualFrameScheduler(FrameScheduler):
    """Scheduler on a synthetic clock for tests and headless runs.

    Args:
        start_time: Initial clock value in seconds
    """

    def __init__(self, start_time: float = 0.0):
        super().__init__()
        self._time = start_time

    def now(self) -> float:
        return self._time

    def set_time(self, value: float) -> None:
        """Move the clock to an absolute time without running a frame."""
        self._time = value

    def advance(self, dt: float) -> int:
        """Move the clock forward by ``dt`` and run one frame."""
        self._time += dt
        return self.run_frame()

    def run_frames(self, count: int, dt: float = 1 / 60) -> None:
        """Run ``count`` frames, ``dt`` seconds apart."""
        for _ in range(count):
            self.advance(dt)
