"""
Controls - Keyboard input state for the taxi.

Tracks which thrust keys are held and detects fresh presses so that
toggles fire once per key-down, never once per tick or per auto-repeat.
"""

from enum import Enum
from typing import Dict, Set


class Key(str, Enum):
    """Keys the game reacts to."""
    UP = "w"
    DOWN = "s"
    LEFT = "a"
    RIGHT = "d"
    HOVER = "h"
    LANDING_GEAR = "space"
    PAUSE = "p"
    ESCAPE = "Escape"
    ENTER = "Enter"


THRUST_KEYS = (Key.UP.value, Key.DOWN.value, Key.LEFT.value, Key.RIGHT.value)

_ALIASES = {
    " ": "space",
    "space": "space",
    "spacebar": "space",
    "esc": "Escape",
    "escape": "Escape",
    "return": "Enter",
    "enter": "Enter",
}


def normalize_key(name: str) -> str:
    """Map a raw key name onto the game's key vocabulary.

    Args:
        name: Key name as delivered by the input source

    Returns:
        Normalized key name
    """
    if len(name) == 1 and name != " ":
        return name.lower()
    return _ALIASES.get(name.lower(), name)


class InputState:
    """Held-key map plus fresh-press detection."""

    def __init__(self):
        self._held: Set[str] = set()

    def key_down(self, key: str) -> bool:
        """Register a key-down event.

        Args:
            key: Raw or normalized key name

        Returns:
            True if this is a fresh press, False for auto-repeat
        """
        key = normalize_key(key)
        if key in self._held:
            return False
        self._held.add(key)
        return True

    def key_up(self, key: str) -> None:
        """Register a key-up event."""
        self._held.discard(normalize_key(key))

    def is_held(self, key: str) -> bool:
        return normalize_key(key) in self._held

    def thrust_keys(self) -> Dict[str, bool]:
        """Snapshot of the w/s/a/d held state."""
        return {key: key in self._held for key in THRUST_KEYS}

    def release_all(self) -> None:
        """Forget every held key (e.g. when focus leaves the game)."""
        self._held.clear()
