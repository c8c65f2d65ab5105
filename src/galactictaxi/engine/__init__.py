"""
Engine module - Game loop scheduling.

This module contains:
- GameEngine: Fixed-timestep update / variable-rate render loop
- GameCallbacks: Hook interface implemented by games
- Hosts and clocks: Frame scheduling primitives
"""

from galactictaxi.engine.game_engine import GameEngine, EngineConfig, GameCallbacks
from galactictaxi.engine.host import (
    ManualClock,
    ManualFrameHost,
    MonotonicClock,
    RealtimeFrameHost,
)

__all__ = [
    "GameEngine",
    "EngineConfig",
    "GameCallbacks",
    "ManualClock",
    "ManualFrameHost",
    "MonotonicClock",
    "RealtimeFrameHost",
]
