"""Tests for world state management."""

import pytest

from galactictaxi.simulation.world import World, WorldConfig
from galactictaxi.taxi.taxi import Taxi, TaxiConfig


DT = 1.0 / 60.0


class TestWorldConfig:
    """Test world configuration."""

    def test_defaults(self):
        """Test default playfield and taxi."""
        config = WorldConfig()
        assert config.screen_width == 1280
        assert config.screen_height == 720
        assert isinstance(config.taxi, TaxiConfig)

    def test_screen_smaller_than_taxi_rejected(self):
        """Test impossible playfields fail fast."""
        with pytest.raises(ValueError):
            WorldConfig(screen_width=50, screen_height=600)

    def test_negative_bots_rejected(self):
        with pytest.raises(ValueError):
            WorldConfig(bot_count=-1)


class TestWorld:
    """Test world state."""

    def test_world_creation(self):
        """Test world initializes empty."""
        world = World()

        assert world.taxi_count == 0
        assert world.time == 0.0
        assert world.frame == 0
        assert not world.has_player

    def test_player_required(self):
        """Test accessing a missing player is an error."""
        world = World()
        with pytest.raises(RuntimeError):
            _ = world.player

    def test_spawn_player_at_start_fractions(self):
        """Test the player spawns at the configured fractions."""
        world = World(WorldConfig(start_x_fraction=0.5, start_y_fraction=0.25))
        taxi = world.spawn_player()

        assert world.player is taxi
        assert taxi.position == (640.0, 180.0)
        assert taxi.velocity == (0.0, 0.0)

    def test_spawn_player_clamped_inside_screen(self):
        """Test extreme fractions still spawn inside the bounds."""
        world = World(WorldConfig(start_x_fraction=0.0, start_y_fraction=1.0))
        taxi = world.spawn_player()

        assert taxi.state.x == taxi.config.width / 2
        assert taxi.state.y == world.screen_height - taxi.config.height

    def test_bots_are_seeded_and_static(self):
        """Test bots are reproducible and never move."""
        first = World(WorldConfig(bot_count=4, bot_seed=7))
        second = World(WorldConfig(bot_count=4, bot_seed=7))
        first.spawn_player()
        bots = first.spawn_bots()

        assert len(bots) == 4
        assert bots == second.spawn_bots()
        for bot in bots:
            assert 40.0 <= bot.x <= 1240.0
            assert 0.0 <= bot.y <= 680.0

        for _ in range(30):
            first.step({first.player.taxi_id: {"d": True}}, DT)

        assert first.bots == bots

    def test_step_advances_time(self):
        """Test each step advances time and frame count."""
        world = World()
        world.spawn_player()

        world.step({}, 0.1)
        world.step({}, 0.1)

        assert world.time == pytest.approx(0.2)
        assert world.frame == 2

    def test_taxis_step_independently(self):
        """Test several taxis follow their own inputs."""
        world = World()
        left = Taxi(world.config.taxi)
        right = Taxi(world.config.taxi)
        left_id = world.add_taxi(left)
        right_id = world.add_taxi(right)
        left.reset(x=640.0, y=300.0)
        right.reset(x=640.0, y=300.0)

        for _ in range(10):
            world.step({left_id: {"a": True}, right_id: {"d": True}}, DT)

        assert left.state.x < 640.0 < right.state.x
        assert not left.state.facing_right
        assert right.state.facing_right

    def test_remove_taxi(self):
        """Test removing taxis, including the player."""
        world = World()
        player = world.spawn_player()

        assert world.get_taxi(player.taxi_id) is player
        assert world.remove_taxi(player.taxi_id)
        assert not world.remove_taxi(player.taxi_id)
        assert not world.has_player
        assert world.get_taxi(player.taxi_id) is None

    def test_resize_clamps_on_next_step(self):
        """Test shrinking the playfield pulls taxis back inside."""
        world = World()
        taxi = world.spawn_player()
        taxi.reset(x=1200.0, y=100.0)

        world.resize(800.0, 600.0)
        world.step({}, DT)

        assert taxi.state.x == 760.0
        assert taxi.state.vx == 0.0

        with pytest.raises(ValueError):
            world.resize(10.0, 10.0)

    def test_reset(self):
        """Test reset clears entities and time."""
        world = World(WorldConfig(bot_seed=3))
        world.spawn_player()
        first_bots = world.spawn_bots()
        world.step({}, DT)

        world.reset()

        assert world.taxi_count == 0
        assert world.bots == []
        assert world.time == 0.0
        assert world.spawn_bots() == first_bots

    def test_get_state(self):
        """Test state dictionary."""
        world = World()
        world.spawn_player()
        world.spawn_bots(2)
        state = world.get_state()

        assert state["taxi_count"] == 1
        assert state["bot_count"] == 2
        assert state["player_id"] == 0
        assert state["screen"] == (1280.0, 720.0)
