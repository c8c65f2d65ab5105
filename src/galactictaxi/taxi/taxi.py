"""
Taxi - The player's space taxi.

Holds the entity state and drives the physics engine once per fixed
update. Flight modes:
- Regular: constant lift slows the fall, thrusters stack on top
- Hover: velocity damping plus gravity-cancelling thrust
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping
import numpy as np

from galactictaxi.simulation.physics import Bounds, PhysicsConfig, PhysicsEngine


@dataclass
class TaxiConfig:
    """Taxi sprite and physics configuration."""
    width: float = 80.0     # Sprite width in px
    height: float = 40.0    # Sprite height in px
    physics: PhysicsConfig | None = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Taxi size must be positive, got {self.width}x{self.height}")


@dataclass
class TaxiState:
    """Current taxi state for physics integration."""
    # Position (px, x is the sprite center, y the sprite top)
    x: float = 0.0
    y: float = 0.0

    # Velocity (px/s, +y is down)
    vx: float = 0.0
    vy: float = 0.0

    # Flags
    on_ground: bool = False
    hover_mode: bool = False
    facing_right: bool = True
    landing_gear: bool = False


@dataclass(frozen=True)
class TaxiSnapshot:
    """Read-only view handed to the presentation layer."""
    x: float
    y: float
    facing_right: bool
    landing_gear: bool
    hover_mode: bool


class Taxi:
    """Space taxi entity.

    Usage:
        taxi = Taxi()
        taxi.reset(x=400, y=100)
        taxi.step({"w": True}, dt=1 / 60, bounds=bounds)
    """

    def __init__(
        self,
        config: TaxiConfig | None = None,
        taxi_id: int = 0,
        physics: PhysicsEngine | None = None,
    ):
        """Initialize taxi.

        Args:
            config: Taxi configuration. Uses defaults if None.
            taxi_id: Identifier within the world
            physics: Shared physics engine. Built from config if None.
        """
        self.config = config or TaxiConfig()
        self.taxi_id = taxi_id
        self.physics = physics or PhysicsEngine(self.config.physics)

        self.state = TaxiState()
        self._prev_x: float = 0.0
        self._prev_y: float = 0.0

    def reset(self, x: float = 0.0, y: float = 0.0) -> None:
        """Reset taxi to rest at the given position.

        Args:
            x: Starting X (sprite center)
            y: Starting Y (sprite top)
        """
        self.state = TaxiState(x=x, y=y)
        self._prev_x = x
        self._prev_y = y

    @property
    def position(self) -> tuple[float, float]:
        """Current (x, y) position."""
        return (self.state.x, self.state.y)

    @property
    def velocity(self) -> tuple[float, float]:
        """Current (vx, vy) velocity."""
        return (self.state.vx, self.state.vy)

    @property
    def speed(self) -> float:
        """Current speed in px/s."""
        return float(np.hypot(self.state.vx, self.state.vy))

    def bounds_for(self, screen_width: float, screen_height: float) -> Bounds:
        """Position bounds of this taxi on a screen."""
        return Bounds.for_sprite(
            screen_width, screen_height, self.config.width, self.config.height
        )

    def toggle_hover(self) -> bool:
        """Flip hover mode. Returns the new value."""
        self.state.hover_mode = not self.state.hover_mode
        return self.state.hover_mode

    def toggle_landing_gear(self) -> bool:
        """Flip the landing gear. Cosmetic only. Returns the new value."""
        self.state.landing_gear = not self.state.landing_gear
        return self.state.landing_gear

    def step(self, held: Mapping[str, bool], dt: float, bounds: Bounds) -> TaxiState:
        """Advance taxi simulation by one fixed update.

        Args:
            held: Held state of the w/s/a/d keys
            dt: Time step in seconds
            bounds: Allowed position range

        Returns:
            Updated taxi state
        """
        state = self.state
        self._prev_x = state.x
        self._prev_y = state.y

        if held.get("a", False):
            state.facing_right = False
        if held.get("d", False):
            state.facing_right = True

        position, velocity, on_ground = self.physics.step(
            np.array([state.x, state.y], dtype=float),
            np.array([state.vx, state.vy], dtype=float),
            held,
            state.hover_mode,
            bounds,
            dt,
        )

        state.x = float(position[0])
        state.y = float(position[1])
        state.vx = float(velocity[0])
        state.vy = float(velocity[1])
        state.on_ground = on_ground

        return state

    def interpolate(self, alpha: float) -> tuple[float, float]:
        """Blend the previous and current position for smooth drawing.

        Args:
            alpha: Interpolation factor from the engine (clamped to [0, 1])

        Returns:
            Draw position (x, y)
        """
        t = float(np.clip(alpha, 0.0, 1.0))
        return (
            self._prev_x + (self.state.x - self._prev_x) * t,
            self._prev_y + (self.state.y - self._prev_y) * t,
        )

    def snapshot(self) -> TaxiSnapshot:
        """Get the presentation snapshot."""
        return TaxiSnapshot(
            x=self.state.x,
            y=self.state.y,
            facing_right=self.state.facing_right,
            landing_gear=self.state.landing_gear,
            hover_mode=self.state.hover_mode,
        )

    def get_telemetry(self) -> Dict[str, Any]:
        """Get taxi telemetry.

        Returns:
            Dictionary of the full taxi state
        """
        return {
            "taxi_id": self.taxi_id,
            "x": self.state.x,
            "y": self.state.y,
            "vx": self.state.vx,
            "vy": self.state.vy,
            "speed": self.speed,
            "on_ground": self.state.on_ground,
            "hover_mode": self.state.hover_mode,
            "facing_right": self.state.facing_right,
            "landing_gear": self.state.landing_gear,
        }
