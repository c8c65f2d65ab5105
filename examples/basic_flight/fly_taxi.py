#!/usr/bin/env python3
"""
Basic Flight Example

This example demonstrates how to:
1. Build a game on a manually stepped frame host
2. Start the engine and feed key events
3. Switch between regular and hover flight
4. Read the flight recorder afterwards

Run with: python fly_taxi.py
"""

from galactictaxi import TaxiGame
from galactictaxi.engine import ManualFrameHost
from galactictaxi.telemetry import FlightRecorder

FRAME_MS = 1000.0 / 60.0


def main():
    print("=" * 60)
    print("Galactic Taxi Basic Flight Example")
    print("=" * 60)

    # Step 1: Build the game on a deterministic host
    print("\n1. Setting up game...")
    host = ManualFrameHost()
    recorder = FlightRecorder()
    game = TaxiGame(recorder=recorder, host=host)

    game.engine.start()
    taxi = game.player
    print(f"   Taxi spawned at ({taxi.state.x:.0f}, {taxi.state.y:.0f})")
    print(f"   Bots: {len(game.world.bots)} (static)")

    # Step 2: Fall for one second in regular mode
    print("\n2. Regular mode, no thrust, 1 second...")
    host.run_frames(60, FRAME_MS)
    print(f"   vy = {taxi.state.vy:.1f} px/s, y = {taxi.state.y:.1f}")

    # Step 3: Hover and let damping bleed off the fall
    print("\n3. Hover mode, 2 seconds...")
    game.handle_key_down("h")
    game.handle_key_up("h")
    host.run_frames(120, FRAME_MS)
    print(f"   vy = {taxi.state.vy:.1f} px/s, y = {taxi.state.y:.1f}")

    # Step 4: Strafe right while hovering
    print("\n4. Hover + right thruster, 1 second...")
    game.handle_key_down("d")
    host.run_frames(60, FRAME_MS)
    game.handle_key_up("d")
    print(f"   vx = {taxi.state.vx:.1f} px/s, x = {taxi.state.x:.1f}, "
          f"facing {'right' if taxi.state.facing_right else 'left'}")

    # Step 5: Recorder summary
    print("\n5. Flight recorder:")
    for name, channel in recorder.get_summary().items():
        print(f"   {name:12s} min={channel['min']} max={channel['max']} last={channel['last']}")

    game.engine.stop()
    print("\n" + "=" * 60)
    print(f"Flight complete! {game.world.frame} updates, {game.world.time:.2f}s simulated")
    print("=" * 60)


if __name__ == "__main__":
    main()
