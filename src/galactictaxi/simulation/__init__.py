"""
Simulation module - Flight physics and world state.

This module contains:
- PhysicsEngine: Force composition, integration, boundary resolution
- World: Taxis, static bots and simulation time
  (import from ``galactictaxi.simulation.world``; it depends on the taxi
  package, which in turn depends on the physics defined here)
"""

from galactictaxi.simulation.physics import PhysicsEngine, PhysicsConfig, Bounds

__all__ = [
    "PhysicsEngine",
    "PhysicsConfig",
    "Bounds",
]
