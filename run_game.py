#!/usr/bin/env python3
"""
Galactic Taxi Headless Runner

Runs a complete cabinet session in real time without a display:
- Inserts a coin and starts the game
- Flies the taxi with a scripted key pattern
- Logs taxi state, engine stats and a flight recorder summary

Usage:
    python run_game.py                      # 5 second session
    python run_game.py --duration 10        # longer session
    python run_game.py --pattern drift      # hold right thruster
    python run_game.py --hover              # start in hover mode
    python run_game.py --ups 120 --refresh 144
    python run_game.py --help               # Show all options
"""

import argparse
import logging
import sys

from galactictaxi.arcade import ArcadeCabinet
from galactictaxi.engine.game_engine import EngineConfig
from galactictaxi.engine.host import RealtimeFrameHost
from galactictaxi.game import GameConfig, RenderFrame, TaxiGame
from galactictaxi.simulation.physics import PhysicsConfig
from galactictaxi.simulation.world import WorldConfig
from galactictaxi.taxi.taxi import TaxiConfig
from galactictaxi.telemetry.recorder import FlightRecorder

logger = logging.getLogger("galactictaxi.run_game")

PATTERNS = ("idle", "hop", "drift", "zigzag")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Galactic Taxi headless runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Hop up and down for ten seconds
    python run_game.py --duration 10 --pattern hop

    # Stress the frame skip: 240 updates per second on a 30 Hz host
    python run_game.py --ups 240 --refresh 30 --log-level DEBUG
        """
    )

    engine_group = parser.add_argument_group("Engine")
    engine_group.add_argument("--fps", type=float, default=60.0,
                              help="Target render rate (default: 60)")
    engine_group.add_argument("--ups", type=float, default=60.0,
                              help="Logic updates per second (default: 60)")
    engine_group.add_argument("--max-frame-skip", type=int, default=5,
                              help="Maximum updates per frame (default: 5)")
    engine_group.add_argument("--refresh", type=float, default=60.0,
                              help="Host refresh rate in Hz (default: 60)")

    physics_group = parser.add_argument_group("Physics")
    physics_group.add_argument("--gravity", type=float, default=9.81,
                               help="Gravity in m/s^2 (default: 9.81)")
    physics_group.add_argument("--thruster-force", type=float, default=800.0,
                               help="Thruster acceleration in px/s^2 (default: 800)")
    physics_group.add_argument("--hover", action="store_true",
                               help="Start in hover mode")

    parser.add_argument("--duration", type=float, default=5.0,
                        help="Session length in seconds (default: 5)")
    parser.add_argument("--pattern", choices=PATTERNS, default="hop",
                        help="Scripted flight pattern (default: hop)")
    parser.add_argument("--report-every", type=float, default=1.0,
                        help="Seconds between state log lines (default: 1)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for bot placement")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: INFO)")

    return parser.parse_args()


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


class ScriptedPilot:
    """Presses and releases keys on the cabinet following a pattern."""

    def __init__(self, cabinet: ArcadeCabinet, pattern: str):
        self.cabinet = cabinet
        self.pattern = pattern

    def _wanted_keys(self, t: float) -> set:
        if self.pattern == "hop":
            return {"w"} if t % 2.0 < 0.6 else set()
        if self.pattern == "drift":
            return {"d"}
        if self.pattern == "zigzag":
            return {"w", "a"} if int(t) % 2 else {"w", "d"}
        return set()

    def fly(self, t: float) -> None:
        """Sync held keys with the pattern at simulation time ``t``."""
        wanted = self._wanted_keys(t)
        game_input = self.cabinet.game.input
        for key in ("w", "s", "a", "d"):
            held = game_input.is_held(key)
            if key in wanted and not held:
                self.cabinet.key_down(key)
            elif key not in wanted and held:
                self.cabinet.key_up(key)


class LogRenderer:
    """Renderer that logs the taxi instead of drawing it."""

    def __init__(self, game: TaxiGame, pilot: ScriptedPilot, report_every: float):
        self.game = game
        self.pilot = pilot
        self.report_every = report_every
        self._next_report = 0.0

    def draw(self, frame: RenderFrame) -> None:
        t = self.game.world.time
        self.pilot.fly(t)

        if t >= self._next_report:
            self._next_report = t + self.report_every
            taxi = frame.taxi
            stats = self.game.engine.get_stats()
            logger.info(
                "t=%5.2fs pos=(%7.1f, %6.1f) %s%s gear=%s fps=%d ups=%d",
                t, taxi.x, taxi.y,
                "hover" if taxi.hover_mode else "regular",
                " >" if taxi.facing_right else " <",
                "down" if taxi.landing_gear else "up",
                stats["fps"], stats["ups"],
            )


def build_cabinet(args: argparse.Namespace) -> tuple[ArcadeCabinet, RealtimeFrameHost, FlightRecorder]:
    """Build the cabinet and its collaborators from CLI arguments."""
    config = GameConfig(
        engine=EngineConfig(
            target_fps=args.fps,
            target_ups=args.ups,
            max_frame_skip=args.max_frame_skip,
        ),
        world=WorldConfig(
            bot_seed=args.seed,
            taxi=TaxiConfig(
                physics=PhysicsConfig(
                    gravity=args.gravity,
                    thruster_force=args.thruster_force,
                ),
            ),
        ),
    )
    host = RealtimeFrameHost(refresh_hz=args.refresh)
    recorder = FlightRecorder()
    game = TaxiGame(config, recorder=recorder, host=host)
    cabinet = ArcadeCabinet(game)
    game.renderer = LogRenderer(game, ScriptedPilot(cabinet, args.pattern), args.report_every)
    return cabinet, host, recorder


def main() -> int:
    args = parse_args()
    setup_logging(args.log_level)

    try:
        cabinet, host, recorder = build_cabinet(args)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    cabinet.key_down("1")
    cabinet.key_down("Enter")
    if args.hover:
        cabinet.key_down("h")
        cabinet.key_up("h")

    host.run(duration_s=args.duration)
    stats = cabinet.game.engine.get_stats()
    cabinet.key_down("Escape")

    logger.info("=" * 60)
    logger.info("Session complete: %.2fs simulated, %d updates",
                cabinet.game.world.time, cabinet.game.world.frame)
    logger.info("Last stats: fps=%d ups=%d", stats["fps"], stats["ups"])
    for name, channel in recorder.get_summary().items():
        logger.info("  %-12s min=%s max=%s mean=%s", name,
                    channel["min"], channel["max"], channel["mean"])
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
