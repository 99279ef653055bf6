#!/usr/bin/env python3
"""Headless tick profiler.

Usage:
    python scripts/profile_simulation.py --ticks 5000 --seed 42
    python scripts/profile_simulation.py --ticks 20000 --level level_2 --cprofile profile.prof

Drives the GameStateMachine with random key presses (confirming through every
menu, win and game over) and reports:
    - Per-tick timing statistics (min, max, mean, p50, p95, p99)
    - Throughput (ticks/sec)
    - How many ticks were spent in each game state
    - Optional: cProfile dump for flame graph generation
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import random
import statistics
import sys
import time
from collections import Counter

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from snekyfox.config import GameConfig
from snekyfox.core.enums import GameState
from snekyfox.engine.game_state import GameStateMachine
from snekyfox.engine.simulation import TickInput
from snekyfox.systems.audio import RecordingAudio
from snekyfox.systems.level_loader import TiledLevelLoader

_MOVES = (
    TickInput(left=True),
    TickInput(right=True),
    TickInput(up=True),
    TickInput(down=True),
    TickInput(),
)
_CONFIRM = TickInput(confirm=True)


def _run(cfg: GameConfig, num_ticks: int, seed: int, dt: float) -> dict:
    rng = random.Random(seed)
    audio = RecordingAudio(cfg.cue_lengths)
    machine = GameStateMachine(cfg, TiledLevelLoader(cfg.levels_dir), audio)

    tick_times: list[float] = []
    states: Counter[str] = Counter()
    levels: Counter[str] = Counter()

    for _ in range(num_ticks):
        keys = rng.choice(_MOVES) if machine.state is GameState.RUNNING else _CONFIRM
        t0 = time.perf_counter()
        state = machine.update(dt, keys)
        tick_times.append(time.perf_counter() - t0)
        audio.advance(dt)
        states[state.name] += 1
        levels[machine.world.level_name] += 1

    return {"tick_times": tick_times, "states": states, "levels": levels, "cues": len(audio.played)}


def _percentile(data: list[float], p: float) -> float:
    ordered = sorted(data)
    idx = int(len(ordered) * p / 100)
    return ordered[min(idx, len(ordered) - 1)]


def _report(result: dict, wall: float) -> None:
    times_us = [t * 1e6 for t in result["tick_times"]]
    n = len(times_us)

    print("=" * 60)
    print(f"  Ticks:        {n}")
    print(f"  Wall time:    {wall:.3f}s")
    print(f"  Throughput:   {n / wall:,.0f} ticks/sec")
    print(f"  Cues played:  {result['cues']}")
    print("-" * 60)
    print("  Tick time (us)")
    print(f"    min   {min(times_us):10.1f}")
    print(f"    mean  {statistics.fmean(times_us):10.1f}")
    print(f"    p50   {_percentile(times_us, 50):10.1f}")
    print(f"    p95   {_percentile(times_us, 95):10.1f}")
    print(f"    p99   {_percentile(times_us, 99):10.1f}")
    print(f"    max   {max(times_us):10.1f}")
    print("-" * 60)
    print("  Ticks per state")
    for name, count in result["states"].most_common():
        print(f"    {name:<12} {count:8d}")
    print("  Ticks per level")
    for name, count in result["levels"].most_common():
        print(f"    {name:<12} {count:8d}")
    print("=" * 60)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile headless game ticks")
    parser.add_argument("--ticks", type=int, default=5000)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--dt", type=float, default=1.0 / 30.0)
    parser.add_argument("--level", type=str, default=None, help="Start level name")
    parser.add_argument("--cprofile", type=str, default=None, help="Write cProfile stats to this file")
    args = parser.parse_args()

    cfg = GameConfig(start_level=args.level) if args.level else GameConfig()

    profiler = cProfile.Profile() if args.cprofile else None
    start = time.perf_counter()
    if profiler:
        profiler.enable()
    result = _run(cfg, args.ticks, args.seed, args.dt)
    if profiler:
        profiler.disable()
    wall = time.perf_counter() - start

    _report(result, wall)

    if profiler:
        profiler.dump_stats(args.cprofile)
        stream = io.StringIO()
        pstats.Stats(profiler, stream=stream).sort_stats("cumulative").print_stats(15)
        print(stream.getvalue())
        print(f"cProfile stats written to {args.cprofile}")


if __name__ == "__main__":
    main()
