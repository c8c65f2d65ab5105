"""
Physics engine - Flight physics for the taxi.

Provides:
- Mode-dependent acceleration composition (regular / hover)
- Hover velocity damping
- Semi-implicit Euler integration
- Inelastic screen boundary resolution
"""

from dataclasses import dataclass
from typing import Mapping
import numpy as np


@dataclass
class PhysicsConfig:
    """Physics simulation configuration.

    Forces are accelerations in px/s^2 except gravity, which is given in
    m/s^2 and scaled by ``pixels_per_meter``.
    """
    # Gravity
    gravity: float = 9.81
    pixels_per_meter: float = 100.0

    # Thrusters
    thruster_force: float = 800.0         # Per held direction key
    regular_flight_thrust: float = 500.0  # Constant lift in regular mode

    # Hover assist
    hover_thrust: float | None = None     # None = cancel gravity exactly
    hover_damping: float = 300.0          # Velocity decay in px/s^2

    def __post_init__(self):
        """Validate configuration."""
        if self.pixels_per_meter <= 0:
            raise ValueError(f"pixels_per_meter must be > 0, got {self.pixels_per_meter}")
        if self.hover_damping < 0:
            raise ValueError(f"hover_damping must be >= 0, got {self.hover_damping}")

    @property
    def gravity_px(self) -> float:
        """Gravity in px/s^2 (positive = down)."""
        return self.gravity * self.pixels_per_meter

    @property
    def effective_hover_thrust(self) -> float:
        """Hover thrust in px/s^2, derived from gravity when unset."""
        if self.hover_thrust is None:
            return self.gravity_px
        return self.hover_thrust


@dataclass(frozen=True)
class Bounds:
    """Allowed range for a sprite position."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def for_sprite(
        cls,
        screen_width: float,
        screen_height: float,
        sprite_width: float,
        sprite_height: float,
    ) -> "Bounds":
        """Bounds for a horizontally centered, top-anchored sprite.

        Args:
            screen_width: Screen width in px
            screen_height: Screen height in px
            sprite_width: Sprite width in px
            sprite_height: Sprite height in px

        Returns:
            Position bounds
        """
        half_width = sprite_width / 2
        return cls(
            min_x=half_width,
            max_x=screen_width - half_width,
            min_y=0.0,
            max_y=screen_height - sprite_height,
        )


class PhysicsEngine:
    """Physics engine for taxi flight.

    Stateless apart from configuration; all entity state is passed in and
    returned, which keeps updates a pure function of state, input and dt.
    """

    def __init__(self, config: PhysicsConfig | None = None):
        """Initialize physics engine.

        Args:
            config: Physics configuration. Uses defaults if None.
        """
        self.config = config or PhysicsConfig()

    def compose_acceleration(
        self,
        held: Mapping[str, bool],
        hover_mode: bool,
    ) -> np.ndarray:
        """Sum all accelerations acting on the taxi.

        Args:
            held: Held state of the w/s/a/d keys
            hover_mode: Whether hover assist is active

        Returns:
            Acceleration [ax, ay] in px/s^2 (screen coordinates, +y down)
        """
        cfg = self.config
        ax = 0.0
        ay = 0.0

        if hover_mode:
            ay -= cfg.effective_hover_thrust
        else:
            ay -= cfg.regular_flight_thrust

        if held.get("w", False):
            ay -= cfg.thruster_force
        if held.get("s", False):
            ay += cfg.thruster_force
        if held.get("a", False):
            ax -= cfg.thruster_force
        if held.get("d", False):
            ax += cfg.thruster_force

        ay += cfg.gravity_px

        return np.array([ax, ay], dtype=float)

    def apply_hover_damping(
        self,
        velocity: np.ndarray,
        dt: float,
    ) -> np.ndarray:
        """Decay each velocity component toward zero without overshoot.

        Args:
            velocity: Velocity [vx, vy]
            dt: Time step in seconds

        Returns:
            Damped velocity
        """
        step = self.config.hover_damping * dt
        magnitude = np.maximum(np.abs(velocity) - step, 0.0)
        return np.sign(velocity) * magnitude

    def integrate_velocity(
        self,
        velocity: np.ndarray,
        acceleration: np.ndarray,
        dt: float,
    ) -> np.ndarray:
        """Integrate velocity from acceleration.

        Args:
            velocity: Current velocity
            acceleration: Acceleration
            dt: Time step

        Returns:
            New velocity
        """
        return velocity + acceleration * dt

    def integrate_position(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
        dt: float,
    ) -> np.ndarray:
        """Integrate position from velocity.

        Args:
            position: Current position [x, y]
            velocity: Velocity [vx, vy]
            dt: Time step

        Returns:
            New position
        """
        return position + velocity * dt

    def resolve_boundaries(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
        bounds: Bounds,
    ) -> tuple[np.ndarray, np.ndarray, bool]:
        """Clamp position into bounds, stopping motion on clamped axes.

        Args:
            position: Position [x, y]
            velocity: Velocity [vx, vy]
            bounds: Allowed position range

        Returns:
            Tuple of (position, velocity, on_ground)
        """
        low = np.array([bounds.min_x, bounds.min_y])
        high = np.array([bounds.max_x, bounds.max_y])

        clamped = np.clip(position, low, high)
        hit = clamped != position

        new_velocity = np.where(hit, 0.0, velocity)
        on_ground = bool(clamped[1] == bounds.max_y)

        return clamped, new_velocity, on_ground

    def step(
        self,
        position: np.ndarray,
        velocity: np.ndarray,
        held: Mapping[str, bool],
        hover_mode: bool,
        bounds: Bounds,
        dt: float,
    ) -> tuple[np.ndarray, np.ndarray, bool]:
        """Advance one fixed update.

        Args:
            position: Position [x, y]
            velocity: Velocity [vx, vy]
            held: Held state of the w/s/a/d keys
            hover_mode: Whether hover assist is active
            bounds: Allowed position range
            dt: Time step in seconds

        Returns:
            Tuple of (position, velocity, on_ground)
        """
        if hover_mode:
            velocity = self.apply_hover_damping(velocity, dt)

        acceleration = self.compose_acceleration(held, hover_mode)

        # Velocity first so this step's forces move this step's position
        velocity = self.integrate_velocity(velocity, acceleration, dt)
        position = self.integrate_position(position, velocity, dt)

        return self.resolve_boundaries(position, velocity, bounds)
