"""GameManager — runs the GameStateMachine on a background thread.

The API reads from an atomically-swapped immutable Snapshot; only the engine
thread ever touches the GameWorld (single writer). Key presses from clients
are merged into a pending TickInput and consumed by the next tick.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from snekyfox.core.snapshot import Snapshot
from snekyfox.engine.game_state import GameStateMachine
from snekyfox.engine.simulation import NO_INPUT, TickInput
from snekyfox.systems.audio import RecordingAudio
from snekyfox.systems.level_loader import LevelSource, TiledLevelLoader
from snekyfox.utils.event_feed import STATE, EventFeed, GameEvent

if TYPE_CHECKING:
    from snekyfox.config import GameConfig

logger = logging.getLogger(__name__)


class GameManager:
    """Manages the game loop lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event feed (lock-guarded bounded deque)
      - pending input (lock-guarded merge)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(self, config: GameConfig, levels: LevelSource | None = None) -> None:
        self.config = config
        self._tick_rate: float = config.tick_rate
        self._levels = levels or TiledLevelLoader(config.levels_dir)

        self._events = EventFeed()
        self._audio = RecordingAudio(config.cue_lengths, self._events)
        self._machine: GameStateMachine | None = None

        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._input_lock = threading.Lock()
        self._pending: TickInput = NO_INPUT
        # Serialises ticks between the engine thread and manual steps.
        self._tick_lock = threading.Lock()

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.005, min(value, 1.0))

    @property
    def events(self) -> EventFeed:
        return self._events

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    def available_levels(self) -> list[str]:
        return self._levels.available()

    # -- input --

    def press(self, keys: TickInput) -> None:
        """Queue key presses for the next tick."""
        with self._input_lock:
            self._pending = self._pending.merge(keys)

    def _take_input(self) -> TickInput:
        with self._input_lock:
            keys, self._pending = self._pending, NO_INPUT
        return keys

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="game-loop", daemon=True)
        self._thread.start()
        logger.info("GameManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("GameManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("GameManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Execute exactly one tick now (pauses the loop first)."""
        if not self._paused.is_set():
            self.pause()
        self.tick_once(self._tick_rate)

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("GameManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild on the start level, and leave stopped."""
        self.stop()
        self._events.clear()
        self._audio.clear()
        self._build()
        logger.info("GameManager reset.")

    def tick_once(self, dt: float) -> None:
        with self._tick_lock:
            machine = self._machine
            if machine is None:
                return
            keys = self._take_input()
            before = machine.state
            self._audio.tick = machine.world.tick
            after = machine.update(dt, keys)
            self._audio.advance(dt)
            if after is not before:
                self._events.append(GameEvent(
                    tick=self._audio.tick, category=STATE,
                    message=f"{before.name.lower()} -> {after.name.lower()}",
                ))
            self._publish()

    # -- internals --

    def _build(self) -> None:
        self._machine = GameStateMachine(self.config, self._levels, self._audio)
        self._publish()

    def _publish(self) -> None:
        snap = self._machine.snapshot() if self._machine else None
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _run_loop(self) -> None:
        logger.info("Game thread started.")
        last = time.perf_counter()
        try:
            while not self._stop_requested.is_set():
                if self._paused.is_set():
                    time.sleep(0.01)
                    last = time.perf_counter()
                    continue
                now = time.perf_counter()
                self.tick_once(now - last)
                last = now
                elapsed = time.perf_counter() - now
                time.sleep(max(0.0, self._tick_rate - elapsed))
        except Exception:
            logger.exception("Game loop crashed at tick %d", self._current_tick())
        finally:
            self._running.clear()
        logger.info("Game thread exited.")

    def _current_tick(self) -> int:
        snap = self.get_snapshot()
        return snap.tick if snap else 0
