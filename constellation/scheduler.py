"""
Frame schedulers that drive the particle tick loop.
"""
import asyncio
import time
from typing import Callable, Optional

from .types import FrameCallback


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class AsyncioFrameScheduler:
    """Runs one callback per display refresh on the asyncio event loop."""

    def __init__(self, fps: int = 60, loop: Optional[asyncio.AbstractEventLoop] = None,
                 clock: Callable[[], float] = monotonic_ms):
        """
        Initialize the scheduler.

        Args:
            fps: Display refresh rate the frames are spaced for
            loop: Event loop to schedule on; defaults to the running loop
            clock: Millisecond clock passed to callbacks
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.interval_s = 1.0 / fps
        self.clock = clock
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    def request_frame(self, callback: FrameCallback) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self.interval_s, self._fire, callback)

    def _fire(self, callback: FrameCallback) -> None:
        self._handle = None
        callback(self.clock())

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def pending(self) -> bool:
        return self._handle is not None


class ManualFrameScheduler:
    """
    Deterministic scheduler driven by a simulated clock.

    Holds at most one pending callback; advance() moves the clock forward and
    runs it.
    """

    def __init__(self, start_ms: float = 0.0, frame_ms: float = 1000.0 / 60):
        self.now_ms = start_ms
        self.frame_ms = frame_ms
        self._pending: Optional[FrameCallback] = None

    def clock(self) -> float:
        return self.now_ms

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending = callback

    def cancel(self) -> None:
        self._pending = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def advance(self, ms: Optional[float] = None) -> bool:
        """
        Move the clock forward and run the pending frame.

        Args:
            ms: Time to advance; one frame interval by default

        Returns:
            True if a frame callback ran
        """
        self.now_ms += self.frame_ms if ms is None else ms
        callback, self._pending = self._pending, None
        if callback is None:
            return False
        callback(self.now_ms)
        return True

    def run_until_idle(self, max_frames: int = 100000) -> int:
        """Advance frame by frame until nothing is scheduled. Returns frames run."""
        count = 0
        while self._pending is not None and count < max_frames:
            self.advance()
            count += 1
        return count
