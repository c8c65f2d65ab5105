"""
Galactic Taxi - A retro arcade flight game core.

This package provides the headless game core:
- Fixed-timestep game engine with frame-skip protection
- Taxi flight physics with regular and hover modes
- Keyboard controls with edge-triggered toggles
- Coin-operated arcade cabinet flow
- In-memory flight recording
"""

__version__ = "0.1.0"

from galactictaxi.engine.game_engine import GameEngine, EngineConfig
from galactictaxi.taxi.taxi import Taxi
from galactictaxi.simulation.world import World
from galactictaxi.game import TaxiGame, GameConfig
from galactictaxi.arcade import ArcadeCabinet

__all__ = [
    "GameEngine",
    "EngineConfig",
    "Taxi",
    "World",
    "TaxiGame",
    "GameConfig",
    "ArcadeCabinet",
    "__version__",
]
