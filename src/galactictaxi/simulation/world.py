"""
World - World state management for the simulation.

Manages:
- Screen dimensions (the playfield)
- Taxis, keyed by id, each stepped independently
- Static AI bot sprites
- Global time
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional
import numpy as np

from galactictaxi.simulation.physics import PhysicsEngine
from galactictaxi.taxi.taxi import Taxi, TaxiConfig


@dataclass
class WorldConfig:
    """World configuration."""
    # Playfield (px)
    screen_width: float = 1280.0
    screen_height: float = 720.0

    # Player spawn, as fractions of the playfield
    start_x_fraction: float = 0.5
    start_y_fraction: float = 0.25

    # Decorative bots
    bot_count: int = 3
    bot_seed: int | None = None

    taxi: TaxiConfig | None = None

    def __post_init__(self):
        """Validate configuration."""
        if self.taxi is None:
            self.taxi = TaxiConfig()
        if self.screen_width < self.taxi.width or self.screen_height < self.taxi.height:
            raise ValueError(
                f"Screen {self.screen_width}x{self.screen_height} is smaller than "
                f"the taxi sprite {self.taxi.width}x{self.taxi.height}"
            )
        if self.bot_count < 0:
            raise ValueError(f"bot_count must be >= 0, got {self.bot_count}")


@dataclass(frozen=True)
class BotSprite:
    """AI bot sprite. Placed once and never simulated."""
    bot_id: int
    x: float
    y: float
    facing_right: bool


class World:
    """World state container for simulation.

    Owns every entity of one game session. Several worlds can run side by
    side since nothing is held at module level.
    """

    def __init__(
        self,
        config: WorldConfig | None = None,
        physics: PhysicsEngine | None = None,
    ):
        """Initialize world.

        Args:
            config: World configuration. Uses defaults if None.
            physics: Physics engine shared by all taxis
        """
        self.config = config or WorldConfig()
        self.physics = physics or PhysicsEngine(self.config.taxi.physics)

        self.screen_width = self.config.screen_width
        self.screen_height = self.config.screen_height

        # Taxi management
        self._taxis: Dict[int, Taxi] = {}
        self._next_taxi_id: int = 0
        self._player_id: Optional[int] = None

        self._bots: List[BotSprite] = []
        self._rng = np.random.default_rng(self.config.bot_seed)

        # Timing
        self._time: float = 0.0
        self._frame: int = 0

    @property
    def time(self) -> float:
        """Current simulation time in seconds."""
        return self._time

    @property
    def frame(self) -> int:
        """Number of updates run."""
        return self._frame

    @property
    def taxis(self) -> List[Taxi]:
        """List of all taxis."""
        return list(self._taxis.values())

    @property
    def taxi_count(self) -> int:
        return len(self._taxis)

    @property
    def bots(self) -> List[BotSprite]:
        """Static bot sprites."""
        return list(self._bots)

    @property
    def player(self) -> Taxi:
        """The player's taxi."""
        if self._player_id is None or self._player_id not in self._taxis:
            raise RuntimeError("No player taxi spawned")
        return self._taxis[self._player_id]

    @property
    def has_player(self) -> bool:
        return self._player_id is not None and self._player_id in self._taxis

    def add_taxi(self, taxi: Taxi) -> int:
        """Add a taxi to the world.

        Args:
            taxi: Taxi to add

        Returns:
            Taxi ID
        """
        taxi_id = self._next_taxi_id
        self._next_taxi_id += 1

        taxi.taxi_id = taxi_id
        self._taxis[taxi_id] = taxi
        return taxi_id

    def remove_taxi(self, taxi_id: int) -> bool:
        """Remove a taxi from the world.

        Args:
            taxi_id: ID of taxi to remove

        Returns:
            True if taxi was removed
        """
        if taxi_id not in self._taxis:
            return False
        del self._taxis[taxi_id]
        if taxi_id == self._player_id:
            self._player_id = None
        return True

    def get_taxi(self, taxi_id: int) -> Optional[Taxi]:
        """Get taxi by ID, or None."""
        return self._taxis.get(taxi_id)

    def spawn_player(self) -> Taxi:
        """Spawn the player's taxi at the configured start position.

        Returns:
            The new player taxi
        """
        taxi = Taxi(self.config.taxi, physics=self.physics)
        bounds = taxi.bounds_for(self.screen_width, self.screen_height)

        x = float(np.clip(self.screen_width * self.config.start_x_fraction,
                          bounds.min_x, bounds.max_x))
        y = float(np.clip(self.screen_height * self.config.start_y_fraction,
                          bounds.min_y, bounds.max_y))
        taxi.reset(x=x, y=y)

        self._player_id = self.add_taxi(taxi)
        return taxi

    def spawn_bots(self, count: int | None = None) -> List[BotSprite]:
        """Place decorative bots at random spots on the playfield.

        Args:
            count: Number of bots (config value if None)

        Returns:
            The placed bots
        """
        count = self.config.bot_count if count is None else count
        taxi_cfg = self.config.taxi
        half_width = taxi_cfg.width / 2

        for _ in range(count):
            bot = BotSprite(
                bot_id=len(self._bots),
                x=float(self._rng.uniform(half_width, self.screen_width - half_width)),
                y=float(self._rng.uniform(0.0, self.screen_height - taxi_cfg.height)),
                facing_right=bool(self._rng.random() < 0.5),
            )
            self._bots.append(bot)

        return self.bots

    def resize(self, screen_width: float, screen_height: float) -> None:
        """Change the playfield size. Taxis are clamped on their next step.

        Args:
            screen_width: New width in px
            screen_height: New height in px
        """
        taxi_cfg = self.config.taxi
        if screen_width < taxi_cfg.width or screen_height < taxi_cfg.height:
            raise ValueError(f"Screen {screen_width}x{screen_height} is too small")
        self.screen_width = screen_width
        self.screen_height = screen_height

    def step(self, inputs: Mapping[int, Mapping[str, bool]], dt: float) -> None:
        """Advance every taxi by one fixed update.

        Args:
            inputs: Held keys per taxi ID (taxis without an entry coast)
            dt: Time step in seconds
        """
        for taxi in self._taxis.values():
            held = inputs.get(taxi.taxi_id, {})
            taxi.step(held, dt, taxi.bounds_for(self.screen_width, self.screen_height))

        self.advance_time(dt)

    def advance_time(self, dt: float) -> None:
        """Advance simulation time.

        Args:
            dt: Time step in seconds
        """
        self._time += dt
        self._frame += 1

    def reset(self) -> None:
        """Reset world state."""
        self._taxis.clear()
        self._next_taxi_id = 0
        self._player_id = None
        self._bots.clear()
        self._rng = np.random.default_rng(self.config.bot_seed)
        self._time = 0.0
        self._frame = 0

    def get_state(self) -> dict:
        """Get world state as a dictionary.

        Returns:
            Dictionary containing world state
        """
        return {
            "time": self._time,
            "frame": self._frame,
            "screen": (self.screen_width, self.screen_height),
            "taxi_count": self.taxi_count,
            "player_id": self._player_id,
            "bot_count": len(self._bots),
        }
