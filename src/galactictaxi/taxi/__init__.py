"""
Taxi module - The player's craft and its controls.

This module contains:
- Taxi: Entity state, flight modes and per-update physics step
- InputState: Held thrust keys and fresh-press detection
"""

from galactictaxi.taxi.taxi import Taxi, TaxiConfig, TaxiState, TaxiSnapshot
from galactictaxi.taxi.controls import InputState, Key, normalize_key

__all__ = [
    "Taxi",
    "TaxiConfig",
    "TaxiState",
    "TaxiSnapshot",
    "InputState",
    "Key",
    "normalize_key",
]
