"""
Host primitives - Clocks and frame hosts driving the game loop.

Provides:
- Monotonic millisecond clocks (real and manual)
- Frame hosts exposing request/cancel of per-frame callbacks
- A manually stepped host for tests and embedding
- A real-time host that sleeps to a fixed refresh rate
"""

from typing import Callable, Dict, Protocol
import logging
import time

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class Clock(Protocol):
    """Monotonic millisecond timer."""

    def now_ms(self) -> float:
        ...


class FrameHost(Protocol):
    """Per-frame scheduling primitive (requestAnimationFrame-like)."""

    def request_frame(self, callback: FrameCallback) -> int:
        ...

    def cancel_frame(self, handle: int) -> None:
        ...


class MonotonicClock:
    """Wall clock backed by ``time.perf_counter``."""

    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0


class ManualClock:
    """Clock whose time only moves when told to."""

    def __init__(self, start_ms: float = 0.0):
        self._now = start_ms

    def now_ms(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        """Move the clock forward.

        Args:
            delta_ms: Milliseconds to advance

        Returns:
            New time in milliseconds
        """
        if delta_ms < 0:
            raise ValueError("Clock cannot move backwards")
        self._now += delta_ms
        return self._now


class _CallbackQueue:
    """Pending frame callbacks keyed by handle."""

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle: int = 1

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def _fire(self, timestamp_ms: float) -> int:
        # Callbacks requested while firing belong to the next frame.
        due = self._pending
        self._pending = {}
        for callback in due.values():
            callback(timestamp_ms)
        return len(due)


class ManualFrameHost(_CallbackQueue):
    """Frame host stepped explicitly by the caller.

    Each call to ``run_frame`` advances the shared clock and fires every
    callback that was pending before the frame began.

    Usage:
        clock = ManualClock()
        host = ManualFrameHost(clock)
        engine = GameEngine(host=host, clock=clock)
        engine.start()
        host.run_frame(1000 / 60)
    """

    def __init__(self, clock: ManualClock | None = None):
        super().__init__()
        self.clock = clock or ManualClock()
        self.frames_run: int = 0

    def run_frame(self, delta_ms: float) -> int:
        """Advance the clock and fire pending callbacks.

        Args:
            delta_ms: Time between the previous frame and this one

        Returns:
            Number of callbacks fired
        """
        now = self.clock.advance(delta_ms)
        self.frames_run += 1
        return self._fire(now)

    def run_frames(self, count: int, delta_ms: float) -> None:
        """Run several frames with a constant delta."""
        for _ in range(count):
            self.run_frame(delta_ms)


class RealtimeFrameHost(_CallbackQueue):
    """Frame host that paces callbacks to a display refresh rate.

    Runs on the calling thread; ``run`` returns once nothing is scheduled
    or the duration has elapsed.
    """

    def __init__(
        self,
        refresh_hz: float = 60.0,
        clock: Clock | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if refresh_hz <= 0:
            raise ValueError("refresh_hz must be > 0")
        super().__init__()
        self.refresh_hz = refresh_hz
        self.clock = clock or MonotonicClock()
        self._sleep = sleep

    @property
    def frame_interval_ms(self) -> float:
        return 1000.0 / self.refresh_hz

    def run(self, duration_s: float | None = None) -> int:
        """Drive frames until idle or until ``duration_s`` has passed.

        Args:
            duration_s: Wall time limit in seconds (None = until idle)

        Returns:
            Number of frames fired
        """
        start = self.clock.now_ms()
        next_frame = start
        frames = 0

        while self.pending_count:
            now = self.clock.now_ms()
            if duration_s is not None and now - start >= duration_s * 1000.0:
                break
            if now < next_frame:
                self._sleep((next_frame - now) / 1000.0)
                now = self.clock.now_ms()
            next_frame = max(next_frame + self.frame_interval_ms, now)
            self._fire(now)
            frames += 1

        logger.debug("Realtime host ran %d frames", frames)
        return frames
