"""
Taxi game - Wires the engine, world, controls and presentation together.

The game implements the engine hooks: every fixed update steps the world
with the currently held thrust keys, every frame hands a snapshot to the
renderer.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol
import logging

from galactictaxi.engine.game_engine import EngineConfig, GameCallbacks, GameEngine
from galactictaxi.engine.host import Clock, FrameHost
from galactictaxi.simulation.world import BotSprite, World, WorldConfig
from galactictaxi.taxi.controls import InputState, Key, normalize_key
from galactictaxi.taxi.taxi import TaxiSnapshot
from galactictaxi.telemetry.recorder import FlightRecorder

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    """Top-level game configuration."""
    engine: EngineConfig = field(default_factory=EngineConfig)
    world: WorldConfig = field(default_factory=WorldConfig)


@dataclass(frozen=True)
class RenderFrame:
    """Everything the presentation layer needs for one frame."""
    alpha: float
    taxi: TaxiSnapshot
    draw_x: float
    draw_y: float
    bots: List[BotSprite]


class Renderer(Protocol):
    """Presentation layer."""

    def draw(self, frame: RenderFrame) -> None:
        ...


class TaxiGame(GameCallbacks):
    """The taxi flight game.

    Usage:
        game = TaxiGame(renderer=my_renderer)
        game.engine.start()
        game.handle_key_down("w")
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        renderer: Renderer | None = None,
        recorder: FlightRecorder | None = None,
        host: FrameHost | None = None,
        clock: Clock | None = None,
    ):
        """Initialize game.

        Args:
            config: Game configuration. Uses defaults if None.
            renderer: Presentation layer (optional)
            recorder: Flight recorder sampled after every update (optional)
            host: Frame host for the engine
            clock: Clock for the engine
        """
        self.config = config or GameConfig()
        self.renderer = renderer
        self.recorder = recorder

        self.world = World(self.config.world)
        self.input = InputState()
        self.engine = GameEngine(self.config.engine, callbacks=self, host=host, clock=clock)

    @property
    def player(self):
        """The player's taxi."""
        return self.world.player

    def on_init(self) -> None:
        self.world.reset()
        self.world.spawn_player()
        self.world.spawn_bots()
        self.input.release_all()
        if self.recorder is not None:
            self.recorder.clear()
        logger.info("Game initialized with %d bots", len(self.world.bots))

    def on_update(self, dt: float) -> None:
        player = self.world.player
        self.world.step({player.taxi_id: self.input.thrust_keys()}, dt)
        if self.recorder is not None:
            self.recorder.record(self.world.time, player)

    def on_render(self, alpha: float) -> None:
        if self.renderer is None:
            return
        player = self.world.player
        draw_x, draw_y = player.interpolate(alpha)
        self.renderer.draw(RenderFrame(
            alpha=alpha,
            taxi=player.snapshot(),
            draw_x=draw_x,
            draw_y=draw_y,
            bots=self.world.bots,
        ))

    def on_pause(self) -> None:
        logger.info("Game paused at t=%.2fs", self.world.time)

    def on_resume(self) -> None:
        logger.info("Game resumed")

    def on_stop(self) -> None:
        self.input.release_all()
        logger.info("Game stopped after %.2fs simulated", self.world.time)

    def handle_key_down(self, key: str) -> None:
        """Feed a key-down event from the input source.

        Args:
            key: Key name
        """
        key = normalize_key(key)
        fresh = self.input.key_down(key)
        if not fresh or not self.world.has_player:
            return

        if key == Key.HOVER.value:
            hover = self.world.player.toggle_hover()
            logger.debug("Hover mode %s", "on" if hover else "off")
        elif key == Key.LANDING_GEAR.value:
            gear = self.world.player.toggle_landing_gear()
            logger.debug("Landing gear %s", "deployed" if gear else "retracted")

    def handle_key_up(self, key: str) -> None:
        """Feed a key-up event from the input source."""
        self.input.key_up(key)

    def snapshot(self) -> Optional[TaxiSnapshot]:
        """Player snapshot, or None before the game has started."""
        if not self.world.has_player:
            return None
        return self.world.player.snapshot()
