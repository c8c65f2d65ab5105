"""Tests for the game engine loop and frame hosts."""

import pytest
import numpy as np

from galactictaxi.engine.game_engine import GameEngine, EngineConfig, GameCallbacks
from galactictaxi.engine.host import ManualClock, ManualFrameHost, RealtimeFrameHost


# 50 UPS gives an exact 20 ms step, so clock arithmetic stays exact.
STEP_MS = 20.0


class RecordingCallbacks(GameCallbacks):
    """Callbacks that log every hook call."""

    def __init__(self):
        self.calls = []
        self.updates = []
        self.renders = []

    def on_init(self):
        self.calls.append("init")

    def on_update(self, dt):
        self.updates.append(dt)

    def on_render(self, alpha):
        self.renders.append(alpha)

    def on_pause(self):
        self.calls.append("pause")

    def on_resume(self):
        self.calls.append("resume")

    def on_stop(self):
        self.calls.append("stop")


def make_engine(max_frame_skip: int = 5):
    host = ManualFrameHost()
    callbacks = RecordingCallbacks()
    engine = GameEngine(
        EngineConfig(target_fps=50, target_ups=50, max_frame_skip=max_frame_skip),
        callbacks=callbacks,
        host=host,
    )
    return engine, host, callbacks


class TestEngineConfig:
    """Test engine configuration."""

    def test_defaults(self):
        """Test default rates."""
        config = EngineConfig()
        assert config.target_fps == 60
        assert config.target_ups == 60
        assert config.max_frame_skip == 5
        assert config.update_interval_ms == pytest.approx(1000 / 60)

    def test_zero_ups_rejected(self):
        """Test invalid update rate fails fast."""
        with pytest.raises(ValueError):
            EngineConfig(target_ups=0)

    def test_invalid_fps_and_frame_skip_rejected(self):
        """Test other invalid values fail fast."""
        with pytest.raises(ValueError):
            EngineConfig(target_fps=-1)
        with pytest.raises(ValueError):
            EngineConfig(max_frame_skip=0)


class TestLifecycle:
    """Test start/stop/pause/resume."""

    def test_start_runs_init_and_first_render(self):
        """Test start invokes init and renders once with no updates."""
        engine, host, callbacks = make_engine()
        engine.start()

        assert engine.is_running
        assert not engine.is_paused
        assert callbacks.calls == ["init"]
        assert callbacks.updates == []
        assert callbacks.renders == [0.0]
        assert host.pending_count == 1

    def test_start_twice_is_noop(self):
        """Test a second start does not re-initialize."""
        engine, host, callbacks = make_engine()
        engine.start()
        engine.start()

        assert callbacks.calls == ["init"]
        assert host.pending_count == 1

    def test_stop_cancels_pending_frame(self):
        """Test stop prevents any further update or render."""
        engine, host, callbacks = make_engine()
        engine.start()
        engine.stop()

        assert not engine.is_running
        assert callbacks.calls == ["init", "stop"]
        assert host.pending_count == 0

        fired = host.run_frame(STEP_MS * 3)
        assert fired == 0
        assert callbacks.updates == []
        assert callbacks.renders == [0.0]

    def test_stop_when_not_running_is_noop(self):
        """Test stop before start does nothing."""
        engine, _, callbacks = make_engine()
        engine.stop()
        assert callbacks.calls == []

    def test_pause_freezes_update_and_render(self):
        """Test paused frames do no work but keep the loop scheduled."""
        engine, host, callbacks = make_engine()
        engine.start()
        engine.pause()

        host.run_frames(10, STEP_MS)

        assert engine.is_paused
        assert callbacks.updates == []
        assert callbacks.renders == [0.0]
        assert host.pending_count == 1
        assert callbacks.calls == ["init", "pause"]

    def test_pause_and_resume_are_idempotent(self):
        """Test repeated pause/resume calls are ignored."""
        engine, _, callbacks = make_engine()
        engine.pause()
        engine.resume()
        assert callbacks.calls == []

        engine.start()
        engine.pause()
        engine.pause()
        engine.resume()
        engine.resume()
        assert callbacks.calls == ["init", "pause", "resume"]

    def test_resume_does_not_count_paused_time(self):
        """Test the wall clock is re-anchored on resume."""
        engine, host, callbacks = make_engine()
        engine.start()

        host.run_frame(30.0)
        assert len(callbacks.updates) == 1
        assert engine.accumulator_ms == pytest.approx(10.0)

        engine.pause()
        host.run_frame(10_000.0)
        engine.resume()

        # Accumulator survived the pause; only 10 ms of new time is added.
        host.run_frame(10.0)
        assert len(callbacks.updates) == 2
        assert engine.accumulator_ms == pytest.approx(0.0)

    def test_stop_from_update_hook(self):
        """Test stopping inside an update halts the rest of the frame."""
        engine, host, callbacks = make_engine()

        def stop_on_update(dt):
            callbacks.updates.append(dt)
            engine.stop()

        callbacks.on_update = stop_on_update
        engine.start()
        host.run_frame(STEP_MS * 3)

        assert len(callbacks.updates) == 1
        assert callbacks.renders == [0.0]
        assert host.pending_count == 0


class TestFixedTimestep:
    """Test update/render scheduling."""

    @pytest.mark.parametrize("k", [1, 2, 3, 5])
    def test_k_updates_one_render(self, k):
        """Test a delta of k steps runs k updates and one render."""
        engine, host, callbacks = make_engine()
        engine.start()

        host.run_frame(STEP_MS * k)

        assert len(callbacks.updates) == k
        assert len(callbacks.renders) == 2
        assert all(dt == pytest.approx(0.02) for dt in callbacks.updates)

    def test_short_frames_accumulate(self):
        """Test sub-step deltas carry over to later frames."""
        engine, host, callbacks = make_engine()
        engine.start()

        host.run_frame(8.0)
        assert callbacks.updates == []
        host.run_frame(8.0)
        assert callbacks.updates == []
        host.run_frame(8.0)
        assert len(callbacks.updates) == 1
        assert engine.accumulator_ms == pytest.approx(4.0)

    def test_alpha_is_leftover_fraction(self):
        """Test render receives the accumulator fraction."""
        engine, host, callbacks = make_engine()
        engine.start()

        host.run_frame(30.0)

        assert callbacks.renders[-1] == pytest.approx(0.5)

    def test_frame_skip_ceiling(self):
        """Test a huge delta runs at most max_frame_skip updates."""
        engine, host, callbacks = make_engine(max_frame_skip=5)
        engine.start()

        host.run_frame(10_000.0)

        assert len(callbacks.updates) == 5
        assert len(callbacks.renders) == 2
        assert engine.accumulator_ms == pytest.approx(STEP_MS * 5)
        assert callbacks.renders[-1] == pytest.approx(5.0)

    def test_accumulator_bound(self):
        """Test accumulator stays in range for arbitrary deltas."""
        engine, host, _ = make_engine(max_frame_skip=3)
        engine.start()
        rng = np.random.default_rng(1234)

        for delta in rng.exponential(scale=40.0, size=500):
            host.run_frame(float(delta))
            assert 0.0 <= engine.accumulator_ms <= engine.max_accumulator_ms

    def test_missing_hooks_are_skipped(self):
        """Test partial callback objects and no callbacks both work."""

        class UpdateOnly:
            def __init__(self):
                self.count = 0

            def on_update(self, dt):
                self.count += 1

        host = ManualFrameHost()
        partial = UpdateOnly()
        engine = GameEngine(EngineConfig(target_ups=50), callbacks=partial, host=host)
        engine.start()
        host.run_frame(STEP_MS * 2)
        engine.pause()
        engine.resume()
        engine.stop()
        assert partial.count == 2

        bare = GameEngine(EngineConfig(target_ups=50), host=ManualFrameHost())
        bare.start()
        bare.host.run_frame(STEP_MS)
        bare.stop()


class TestStats:
    """Test performance statistics."""

    def test_initial_stats(self):
        """Test stats snapshot shape."""
        engine, _, _ = make_engine()
        assert engine.get_stats() == {
            "fps": 0,
            "ups": 0,
            "is_running": False,
            "is_paused": False,
        }

        engine.start()
        engine.pause()
        stats = engine.get_stats()
        assert stats["is_running"]
        assert stats["is_paused"]

    def test_stats_after_one_second(self):
        """Test fps/ups are flushed after a second of frames."""
        engine, host, _ = make_engine()
        engine.start()

        host.run_frames(50, STEP_MS)

        stats = engine.get_stats()
        assert stats["fps"] == 50
        assert stats["ups"] == 49

    def test_stats_round_half_up(self):
        """Test x.5 rates round up rather than to even."""
        engine, host, _ = make_engine(max_frame_skip=10)
        engine.start()

        # 2 frames and 10 updates counted when the window closes at 4000 ms
        host.run_frame(500.0)
        host.run_frame(3500.0)

        stats = engine.get_stats()
        assert stats["fps"] == 1
        assert stats["ups"] == 3

    def test_get_stats_has_no_side_effects(self):
        """Test reading stats does not change them."""
        engine, host, _ = make_engine()
        engine.start()
        host.run_frames(5, STEP_MS)
        assert engine.get_stats() == engine.get_stats()


class TestHosts:
    """Test clocks and frame hosts."""

    def test_manual_clock(self):
        """Test manual clock only moves forward."""
        clock = ManualClock(100.0)
        assert clock.now_ms() == 100.0
        assert clock.advance(5.0) == 105.0
        with pytest.raises(ValueError):
            clock.advance(-1.0)

    def test_manual_host_defers_new_requests(self):
        """Test callbacks requested during a frame wait for the next one."""
        host = ManualFrameHost()
        seen = []

        def callback(now):
            seen.append(now)
            host.request_frame(callback)

        host.request_frame(callback)
        host.run_frame(10.0)
        host.run_frame(10.0)

        assert seen == [10.0, 20.0]
        assert host.pending_count == 1

    def test_manual_host_cancel(self):
        """Test cancelled callbacks never fire."""
        host = ManualFrameHost()
        seen = []
        handle = host.request_frame(seen.append)
        host.cancel_frame(handle)
        host.cancel_frame(handle)

        assert host.run_frame(10.0) == 0
        assert seen == []

    def test_realtime_host_stops_when_idle(self):
        """Test the realtime host returns once nothing is scheduled."""
        clock = ManualClock()
        host = RealtimeFrameHost(refresh_hz=50, clock=clock,
                                 sleep=lambda s: clock.advance(s * 1000.0))
        seen = []
        host.request_frame(seen.append)

        assert host.run() == 1
        assert len(seen) == 1

    def test_realtime_host_paces_engine(self):
        """Test the realtime host drives an engine for a duration."""
        clock = ManualClock()
        host = RealtimeFrameHost(refresh_hz=50, clock=clock,
                                 sleep=lambda s: clock.advance(s * 1000.0))
        callbacks = RecordingCallbacks()
        engine = GameEngine(EngineConfig(target_ups=50), callbacks=callbacks, host=host)
        engine.start()

        frames = host.run(duration_s=1.0)

        assert 49 <= frames <= 52
        assert 48 <= len(callbacks.updates) <= 51
        assert engine.clock is clock

    def test_realtime_host_rejects_bad_rate(self):
        """Test refresh rate validation."""
        with pytest.raises(ValueError):
            RealtimeFrameHost(refresh_hz=0)
