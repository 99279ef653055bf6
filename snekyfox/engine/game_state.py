"""GameStateMachine — level lifecycle around the running simulation.

  START_MENU --confirm--> RUNNING
  RUNNING    --fox caught--> GAME_OVER
  RUNNING    --mail delivered--> WON
  GAME_OVER  --confirm--> RUNNING      (same level, rebuilt)
  WON        --confirm--> RUNNING      (next_level)  |  CREDITS (start level)
  CREDITS    --confirm--> START_MENU

Every transition that loads a level builds a brand new GameWorld; the old
one is dropped whole.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from snekyfox.core.blueprint import build_world
from snekyfox.core.enums import GameState
from snekyfox.core.models import advance_life
from snekyfox.core.snapshot import Snapshot
from snekyfox.core.world_state import GameWorld
from snekyfox.engine.simulation import NO_INPUT, TickInput, WorldSimulation, resolve_move
from snekyfox.systems.audio import AudioSink, NullAudio

if TYPE_CHECKING:
    from snekyfox.config import GameConfig
    from snekyfox.systems.level_loader import LevelSource

logger = logging.getLogger(__name__)


class GameStateMachine:
    """Owns the current GameWorld and dispatches each tick by game state."""

    __slots__ = ("_config", "_levels", "_audio", "_simulation", "_world")

    def __init__(
        self,
        config: GameConfig,
        levels: LevelSource,
        audio: AudioSink | None = None,
        level: str | None = None,
        state: GameState = GameState.START_MENU,
    ) -> None:
        self._config = config
        self._levels = levels
        self._audio = audio or NullAudio()
        self._simulation = WorldSimulation(config, self._audio)
        self._world = self._load(level or config.start_level, state)

    @property
    def world(self) -> GameWorld:
        return self._world

    @property
    def state(self) -> GameState:
        return self._world.state

    def snapshot(self) -> Snapshot:
        return Snapshot.from_world(self._world)

    # -- ticking --

    def update(self, dt: float, keys: TickInput = NO_INPUT) -> GameState:
        """Advance one tick and return the resulting state."""
        world = self._world
        match world.state:
            case GameState.START_MENU:
                if keys.confirm:
                    self._transition(GameState.RUNNING)
            case GameState.RUNNING:
                self._simulation.step(world, dt, resolve_move(keys))
                if world.state is not GameState.RUNNING:
                    logger.info("Level '%s': RUNNING -> %s", world.level_name, world.state.name)
            case GameState.GAME_OVER:
                if keys.confirm:
                    self._replace(world.level_name, GameState.RUNNING)
                else:
                    world.fox.life = advance_life(world.fox.life, dt)
                    world.time += dt
            case GameState.WON:
                if keys.confirm:
                    self._advance_level()
            case GameState.CREDITS:
                if keys.confirm:
                    self._transition(GameState.START_MENU)
        self._world.tick += 1
        return self._world.state

    def restart(self) -> None:
        """Back to the start menu on a fresh copy of the start level."""
        self._replace(self._config.start_level, GameState.START_MENU)

    # -- internals --

    def _advance_level(self) -> None:
        next_level = self._world.next_level
        if next_level:
            self._replace(next_level, GameState.RUNNING)
        else:
            logger.info("No level after '%s', rolling credits", self._world.level_name)
            self._replace(self._config.start_level, GameState.CREDITS)

    def _transition(self, state: GameState) -> None:
        logger.info("%s -> %s", self._world.state.name, state.name)
        self._world.state = state

    def _replace(self, level: str, state: GameState) -> None:
        tick = self._world.tick
        world = self._load(level, state)
        world.tick = tick
        self._world = world

    def _load(self, level: str, state: GameState) -> GameWorld:
        world = build_world(self._levels.load(level), state=state)
        logger.info("Level '%s' loaded in state %s", level, state.name)
        return world
