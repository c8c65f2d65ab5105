"""
Flight recorder - Records taxi telemetry over time.

Samples a taxi once per fixed update (or at a lower rate) into named
channels kept in memory.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import numpy as np

from galactictaxi.telemetry.channel import TelemetryChannel, ChannelConfig
from galactictaxi.taxi.taxi import Taxi


# (unit, precision) per standard channel
STANDARD_CHANNELS = {
    "x": ("px", 2),
    "y": ("px", 2),
    "vx": ("px/s", 2),
    "vy": ("px/s", 2),
    "speed": ("px/s", 2),
    "hover_mode": ("", 0),
    "on_ground": ("", 0),
    "landing_gear": ("", 0),
}

SAMPLE_TIME_EPSILON = 1e-9


@dataclass
class RecorderConfig:
    """Recorder configuration."""
    sample_rate_hz: float | None = None  # None = every call to record()
    channels: List[str] | None = None    # Channels to record (None = all)
    buffer_size: int = 36000             # Ten minutes at 60 UPS

    def __post_init__(self):
        """Validate configuration."""
        if self.sample_rate_hz is not None and self.sample_rate_hz <= 0:
            raise ValueError(f"sample_rate_hz must be > 0, got {self.sample_rate_hz}")
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be >= 1, got {self.buffer_size}")


class FlightRecorder:
    """Records taxi telemetry into channels.

    Usage:
        recorder = FlightRecorder()
        recorder.record(world.time, taxi)
        times, heights = recorder.get_data("y")
    """

    def __init__(self, config: RecorderConfig | None = None):
        """Initialize recorder.

        Args:
            config: Recorder configuration
        """
        self.config = config or RecorderConfig()

        self._channels: Dict[str, TelemetryChannel] = {}
        self._setup_channels()

        self._next_sample_time: float | None = None
        self._sample_interval: float = (
            1.0 / self.config.sample_rate_hz if self.config.sample_rate_hz else 0.0
        )

    def _setup_channels(self) -> None:
        names = self.config.channels or list(STANDARD_CHANNELS.keys())

        for name in names:
            if name not in STANDARD_CHANNELS:
                raise ValueError(f"Unknown telemetry channel: {name}")
            unit, precision = STANDARD_CHANNELS[name]
            cfg = ChannelConfig(
                name=name,
                unit=unit,
                precision=precision,
                buffer_size=self.config.buffer_size,
            )
            self._channels[name] = TelemetryChannel(cfg)

    @property
    def channels(self) -> Dict[str, TelemetryChannel]:
        return self._channels

    @property
    def sample_count(self) -> int:
        """Number of samples taken (per channel)."""
        return max((ch.total_recorded for ch in self._channels.values()), default=0)

    def get_channel(self, name: str) -> Optional[TelemetryChannel]:
        return self._channels.get(name)

    def record(self, time: float, taxi: Taxi) -> bool:
        """Sample a taxi.

        Args:
            time: Current simulation time
            taxi: Taxi to sample

        Returns:
            True if a sample was taken
        """
        # Update times are accumulated sums, so allow for rounding
        if (
            self._next_sample_time is not None
            and time + SAMPLE_TIME_EPSILON < self._next_sample_time
        ):
            return False

        # Re-anchor after a gap instead of sampling a backlog
        if (
            self._next_sample_time is None
            or time - self._next_sample_time >= self._sample_interval
        ):
            self._next_sample_time = time
        self._next_sample_time += self._sample_interval

        telemetry = taxi.get_telemetry()
        for name, channel in self._channels.items():
            channel.record(time, float(telemetry[name]))

        return True

    def get_data(self, name: str) -> tuple[np.ndarray, np.ndarray]:
        """Get (times, values) arrays for a channel.

        Args:
            name: Channel name

        Returns:
            Tuple of arrays (empty if the channel is not recorded)
        """
        channel = self._channels.get(name)
        if channel is None:
            return np.array([]), np.array([])
        return channel.get_times(), channel.get_values()

    def get_current_values(self) -> Dict[str, float]:
        return {name: ch.last_value for name, ch in self._channels.items()}

    def get_summary(self) -> Dict[str, Dict[str, Any]]:
        """Get statistics for all channels."""
        return {name: ch.get_state() for name, ch in self._channels.items()}

    def clear(self) -> None:
        """Clear all recorded data."""
        for channel in self._channels.values():
            channel.clear()
        self._next_sample_time = None
