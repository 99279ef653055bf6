"""LevelArena — test fixture for building small levels in code.

Builds a LevelBlueprint from tile rows plus placed objects, then hands out a
GameWorld or a fully wired GameStateMachine with a RecordingAudio sink.

Usage:
    arena = LevelArena.floor(3, 4).fox(0, 0).mail(2, 3).mailbox(2, 0)
    machine = arena.machine()
    arena.play(machine, "RDDR")
    assert machine.world.fox.pos == Vector2(2, 2)
"""

from __future__ import annotations

import sys
import os
from typing import Sequence

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from snekyfox.config import GameConfig
from snekyfox.core.blueprint import BlueprintObject, LevelBlueprint, build_world
from snekyfox.core.enums import GameState
from snekyfox.core.world_state import GameWorld
from snekyfox.engine.game_state import GameStateMachine
from snekyfox.engine.simulation import TickInput
from snekyfox.systems.audio import RecordingAudio
from snekyfox.systems.level_loader import InMemoryLevels

# tile_width=2, tile_height=1 makes pixel coordinates equal grid coordinates.
_TILE_W = 2
_TILE_H = 1

KEYS = {
    "U": TickInput(up=True),
    "D": TickInput(down=True),
    "L": TickInput(left=True),
    "R": TickInput(right=True),
    "C": TickInput(confirm=True),
    ".": TickInput(),
}


class LevelArena:
    def __init__(self, rows: Sequence[Sequence[int]], name: str = "arena") -> None:
        self.rows = [list(r) for r in rows]
        self.name = name
        self._objects: list[BlueprintObject] = []
        self._properties: dict[str, str] = {}

    @classmethod
    def floor(cls, width: int, height: int, name: str = "arena") -> LevelArena:
        return cls([[1] * width for _ in range(height)], name=name)

    # -- placement --

    def _place(self, kind: str, x: int, y: int, facing: str | None = None) -> LevelArena:
        props = {"facing": facing} if facing is not None else {}
        self._objects.append(BlueprintObject(kind=kind, x=x, y=y, properties=props))
        return self

    def fox(self, x: int, y: int, facing: str | None = None) -> LevelArena:
        return self._place("sneky_fox", x, y, facing)

    def mail(self, x: int, y: int) -> LevelArena:
        return self._place("mail", x, y)

    def mailbox(self, x: int, y: int) -> LevelArena:
        return self._place("mailbox", x, y)

    def pug(self, x: int, y: int, facing: str | None = None) -> LevelArena:
        return self._place("pug", x, y, facing)

    def bone(self, x: int, y: int) -> LevelArena:
        return self._place("bone", x, y)

    def next_level(self, name: str) -> LevelArena:
        self._properties["next_level"] = name
        return self

    # -- products --

    def blueprint(self) -> LevelBlueprint:
        height = len(self.rows)
        width = len(self.rows[0]) if height else 0
        return LevelBlueprint(
            name=self.name,
            width=width,
            height=height,
            tiles=tuple(t for row in self.rows for t in row),
            tile_width=_TILE_W,
            tile_height=_TILE_H,
            objects=tuple(self._objects),
            properties=dict(self._properties),
        )

    def world(self) -> GameWorld:
        return build_world(self.blueprint())

    def machine(
        self,
        state: GameState = GameState.RUNNING,
        others: Sequence[LevelArena] = (),
        config: GameConfig | None = None,
        audio: RecordingAudio | None = None,
    ) -> GameStateMachine:
        levels = InMemoryLevels({self.name: self.blueprint()})
        for other in others:
            levels.add(other.blueprint())
        config = config or GameConfig(start_level=self.name)
        return GameStateMachine(config, levels, audio or RecordingAudio(config.cue_lengths),
                                level=self.name, state=state)

    @staticmethod
    def play(machine: GameStateMachine, keys: str, dt: float = 0.1) -> GameState:
        """Feed one tick per key character; returns the final state."""
        state = machine.state
        for ch in keys:
            state = machine.update(dt, KEYS[ch])
        return state
