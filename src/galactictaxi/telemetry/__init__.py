"""
Telemetry module - In-memory flight recording.

This module contains:
- TelemetryChannel: Bounded time series with statistics
- FlightRecorder: Samples taxi state into channels
"""

from galactictaxi.telemetry.channel import TelemetryChannel, ChannelConfig
from galactictaxi.telemetry.recorder import FlightRecorder, RecorderConfig

__all__ = [
    "TelemetryChannel",
    "ChannelConfig",
    "FlightRecorder",
    "RecorderConfig",
]
