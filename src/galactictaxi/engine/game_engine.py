"""
Game engine - Fixed-timestep update loop with variable-rate rendering.

Provides:
- Decoupled logic updates (fixed dt) and render calls (host cadence)
- Frame-skip protection and accumulator clamping
- Pause/resume/stop lifecycle
- Rolling one-second FPS/UPS statistics
"""

from dataclasses import dataclass
from typing import Any, Dict
import logging
import math

from galactictaxi.engine.host import Clock, FrameHost, MonotonicClock, RealtimeFrameHost

logger = logging.getLogger(__name__)

STATS_WINDOW_MS = 1000.0


@dataclass
class EngineConfig:
    """Game engine configuration."""
    target_fps: float = 60.0     # Rendering rate hint (host decides real cadence)
    target_ups: float = 60.0     # Logic updates per second
    max_frame_skip: int = 5      # Maximum updates per rendered frame

    def __post_init__(self):
        """Validate configuration."""
        if self.target_fps <= 0:
            raise ValueError(f"target_fps must be > 0, got {self.target_fps}")
        if self.target_ups <= 0:
            raise ValueError(f"target_ups must be > 0, got {self.target_ups}")
        if self.max_frame_skip < 1:
            raise ValueError(f"max_frame_skip must be >= 1, got {self.max_frame_skip}")

    @property
    def frame_interval_ms(self) -> float:
        """Time per rendered frame in ms."""
        return 1000.0 / self.target_fps

    @property
    def update_interval_ms(self) -> float:
        """Time per logic update in ms."""
        return 1000.0 / self.target_ups


class GameCallbacks:
    """Hooks invoked by the engine.

    Subclass and override what you need. Any object with a subset of these
    methods works too; missing hooks are skipped.
    """

    def on_init(self) -> None:
        """Called once when the engine starts."""

    def on_update(self, dt: float) -> None:
        """Called every fixed update with dt in seconds."""

    def on_render(self, alpha: float) -> None:
        """Called once per frame with the interpolation factor."""

    def on_pause(self) -> None:
        """Called when the engine pauses."""

    def on_resume(self) -> None:
        """Called when the engine resumes."""

    def on_stop(self) -> None:
        """Called when the engine stops."""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class GameEngine:
    """Fixed-timestep game loop.

    Every host frame runs up to ``max_frame_skip`` fixed updates to consume
    accumulated wall time, then exactly one render. Unconsumed time is carried
    over and clamped so a stalled host cannot build an unbounded backlog.

    Usage:
        engine = GameEngine(EngineConfig(target_ups=60), callbacks=game)
        engine.start()
        host.run()
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        callbacks: GameCallbacks | None = None,
        host: FrameHost | None = None,
        clock: Clock | None = None,
    ):
        """Initialize engine.

        Args:
            config: Engine configuration. Uses defaults if None.
            callbacks: GameCallbacks, or any object with a subset of its hooks
            host: Frame host. A real-time host is created if None.
            clock: Millisecond clock. Uses the host's clock if None.
        """
        self.config = config or EngineConfig()
        self.callbacks = callbacks
        self.host = host or RealtimeFrameHost(refresh_hz=self.config.target_fps)
        self.clock = clock or getattr(self.host, "clock", None) or MonotonicClock()

        # Timing
        self.update_interval_ms = self.config.update_interval_ms
        self.frame_interval_ms = self.config.frame_interval_ms
        self._last_frame_time: float = 0.0
        self._accumulator: float = 0.0

        # State
        self._running: bool = False
        self._paused: bool = False
        self._frame_handle: int | None = None

        # Stats
        self._fps: int = 0
        self._ups: int = 0
        self._frame_count: int = 0
        self._update_count: int = 0
        self._last_stats_time: float = 0.0

    @property
    def is_running(self) -> bool:
        """Check if the loop is running."""
        return self._running

    @property
    def is_paused(self) -> bool:
        """Check if the loop is paused."""
        return self._paused

    @property
    def accumulator_ms(self) -> float:
        """Simulated time not yet consumed by an update."""
        return self._accumulator

    @property
    def max_accumulator_ms(self) -> float:
        """Ceiling applied to the accumulator after each frame."""
        return self.update_interval_ms * self.config.max_frame_skip

    def _invoke(self, hook: str, *args) -> None:
        method = getattr(self.callbacks, hook, None)
        if method is not None:
            method(*args)

    def start(self) -> None:
        """Start the game loop."""
        if self._running:
            return

        self._running = True
        self._paused = False
        self._last_frame_time = self.clock.now_ms()
        self._accumulator = 0.0
        self.reset_stats()

        logger.info("Game engine started (%.0f UPS, max frame skip %d)",
                    self.config.target_ups, self.config.max_frame_skip)
        self._invoke("on_init")

        # on_init may have stopped us
        if self._running:
            self._frame(self._last_frame_time)

    def stop(self) -> None:
        """Stop the game loop and cancel the pending frame."""
        if not self._running:
            return

        self._running = False
        if self._frame_handle is not None:
            self.host.cancel_frame(self._frame_handle)
            self._frame_handle = None

        logger.info("Game engine stopped")
        self._invoke("on_stop")

    def pause(self) -> None:
        """Pause updates and rendering."""
        if not self._running or self._paused:
            return
        self._paused = True
        logger.debug("Game engine paused")
        self._invoke("on_pause")

    def resume(self) -> None:
        """Resume after a pause without counting the paused time."""
        if not self._running or not self._paused:
            return
        self._paused = False
        self._last_frame_time = self.clock.now_ms()
        logger.debug("Game engine resumed")
        self._invoke("on_resume")

    def _frame(self, current_time: float) -> None:
        """Run one host frame."""
        if not self._running:
            return

        self._frame_handle = self.host.request_frame(self._frame)

        if self._paused:
            return

        delta = current_time - self._last_frame_time
        self._last_frame_time = current_time

        self._update_stats()

        self._accumulator += delta

        # Fixed updates, bounded per frame
        updates = 0
        while (
            self._running
            and self._accumulator >= self.update_interval_ms
            and updates < self.config.max_frame_skip
        ):
            self._invoke("on_update", self.update_interval_ms / 1000.0)
            self._accumulator -= self.update_interval_ms
            self._update_count += 1
            updates += 1

        if not self._running:
            return

        # Drop backlog the frame skip could not absorb
        if self._accumulator > self.max_accumulator_ms:
            self._accumulator = self.max_accumulator_ms

        alpha = self._accumulator / self.update_interval_ms
        self._invoke("on_render", alpha)
        self._frame_count += 1

    def _update_stats(self) -> None:
        """Flush FPS/UPS once per stats window."""
        now = self.clock.now_ms()
        elapsed = now - self._last_stats_time

        if elapsed >= STATS_WINDOW_MS:
            self._fps = _round_half_up(self._frame_count * 1000.0 / elapsed)
            self._ups = _round_half_up(self._update_count * 1000.0 / elapsed)
            self._frame_count = 0
            self._update_count = 0
            self._last_stats_time = now

    def reset_stats(self) -> None:
        """Reset performance statistics."""
        self._fps = 0
        self._ups = 0
        self._frame_count = 0
        self._update_count = 0
        self._last_stats_time = self.clock.now_ms()

    def get_stats(self) -> Dict[str, Any]:
        """Get current engine stats.

        Returns:
            Dictionary with fps, ups, is_running and is_paused
        """
        return {
            "fps": self._fps,
            "ups": self._ups,
            "is_running": self._running,
            "is_paused": self._paused,
        }
