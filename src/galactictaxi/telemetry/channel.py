"""
Telemetry channel - Individual data channel for recording.

Provides:
- Bounded sample buffer
- Running statistics
- Time-range queries
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque
import numpy as np


@dataclass
class ChannelConfig:
    """Configuration for a telemetry channel."""
    name: str = "unnamed"
    unit: str = ""
    precision: int = 3
    buffer_size: int = 10000

    def __post_init__(self):
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be >= 1, got {self.buffer_size}")


class TelemetryChannel:
    """Single telemetry data channel.

    Keeps the most recent ``buffer_size`` samples. Min/max cover every
    sample ever recorded; the mean covers the buffered window.
    """

    def __init__(self, config: ChannelConfig | None = None, name: str = "channel"):
        """Initialize channel.

        Args:
            config: Channel configuration
            name: Channel name (used if config not provided)
        """
        if config is None:
            config = ChannelConfig(name=name)
        self.config = config

        self._times: Deque[float] = deque(maxlen=config.buffer_size)
        self._values: Deque[float] = deque(maxlen=config.buffer_size)

        self._min: float = float('inf')
        self._max: float = float('-inf')
        self._sum: float = 0.0
        self._total: int = 0

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def count(self) -> int:
        """Number of buffered samples."""
        return len(self._values)

    @property
    def total_recorded(self) -> int:
        """Number of samples ever recorded."""
        return self._total

    @property
    def min_value(self) -> float:
        return self._min if self._total > 0 else 0.0

    @property
    def max_value(self) -> float:
        return self._max if self._total > 0 else 0.0

    @property
    def mean(self) -> float:
        """Mean of buffered values."""
        return self._sum / len(self._values) if self._values else 0.0

    @property
    def last_value(self) -> float:
        return self._values[-1] if self._values else 0.0

    def record(self, time: float, value: float) -> None:
        """Record a new value.

        Args:
            time: Timestamp
            value: Value to record
        """
        value = float(value)

        if len(self._values) == self._values.maxlen:
            self._sum -= self._values[0]

        self._times.append(time)
        self._values.append(value)

        self._min = min(self._min, value)
        self._max = max(self._max, value)
        self._sum += value
        self._total += 1

    def get_values(self) -> np.ndarray:
        return np.array(self._values, dtype=float)

    def get_times(self) -> np.ndarray:
        return np.array(self._times, dtype=float)

    def get_range(self, start_time: float, end_time: float) -> tuple[np.ndarray, np.ndarray]:
        """Get values in time range.

        Args:
            start_time: Start of range (inclusive)
            end_time: End of range (inclusive)

        Returns:
            Tuple of (times, values) arrays
        """
        times = self.get_times()
        values = self.get_values()

        mask = (times >= start_time) & (times <= end_time)
        return times[mask], values[mask]

    def clear(self) -> None:
        """Clear all recorded data."""
        self._times.clear()
        self._values.clear()
        self._min = float('inf')
        self._max = float('-inf')
        self._sum = 0.0
        self._total = 0

    def get_state(self) -> dict:
        """Get channel state.

        Returns:
            Dictionary with channel statistics
        """
        has_data = self._total > 0
        precision = self.config.precision
        return {
            "name": self.config.name,
            "unit": self.config.unit,
            "count": self.count,
            "min": round(self._min, precision) if has_data else None,
            "max": round(self._max, precision) if has_data else None,
            "mean": round(self.mean, precision) if has_data else None,
            "last": round(self.last_value, precision) if has_data else None,
        }
