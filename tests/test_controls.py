"""Tests for keyboard controls."""

import pytest

from galactictaxi.taxi.controls import InputState, Key, normalize_key


class TestNormalizeKey:
    """Test key name normalization."""

    @pytest.mark.parametrize("raw, expected", [
        ("w", "w"),
        ("W", "w"),
        ("H", "h"),
        (" ", "space"),
        ("Space", "space"),
        ("Escape", "Escape"),
        ("esc", "Escape"),
        ("Enter", "Enter"),
        ("Return", "Enter"),
        ("1", "1"),
        ("ArrowUp", "ArrowUp"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_key(raw) == expected

    def test_key_values_are_normalized(self):
        """Test every game key is already in normalized form."""
        for key in Key:
            assert normalize_key(key.value) == key.value


class TestInputState:
    """Test held-key tracking."""

    def test_initially_nothing_held(self):
        state = InputState()
        assert state.thrust_keys() == {"w": False, "s": False, "a": False, "d": False}

    def test_key_down_and_up(self):
        """Test held state follows key events."""
        state = InputState()
        state.key_down("W")
        state.key_down("d")

        assert state.thrust_keys() == {"w": True, "s": False, "a": False, "d": True}
        assert state.is_held("w")

        state.key_up("w")
        assert not state.is_held("W")
        assert state.thrust_keys()["d"]

    def test_fresh_press_detection(self):
        """Test auto-repeat key-downs are not fresh presses."""
        state = InputState()

        assert state.key_down("h")
        assert not state.key_down("h")
        assert not state.key_down("H")

        state.key_up("h")
        assert state.key_down("h")

    def test_key_up_without_down(self):
        """Test releasing an unknown key is harmless."""
        state = InputState()
        state.key_up("x")
        assert not state.is_held("x")

    def test_release_all(self):
        state = InputState()
        state.key_down("w")
        state.key_down("space")
        state.release_all()

        assert not any(state.thrust_keys().values())
        assert state.key_down("space")
