"""WorldSimulation — the fixed-order update step for a running level.

Tick phases:
  1. Bones — throw a selected bone, run disappearing timers, pick up a bone
  2. Fox — move one tile unless phase 1 consumed the input
  3. Pugs — AI transitions for live pugs, dead-timers for dead ones
  4. Cleanup — drop pugs that finished dying
  5. Mail pickup
  6. Victory
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from snekyfox.ai.pug_behavior import PugContext, advance_pugs, remove_expired_pugs
from snekyfox.core.enums import GameState, SoundCue
from snekyfox.core.models import Bone, Dead, Vector2, direction_from_vector
from snekyfox.core.world_state import GameWorld
from snekyfox.systems.audio import AudioSink

if TYPE_CHECKING:
    from snekyfox.config import GameConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TickInput:
    """Keys pressed since the previous tick."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    confirm: bool = False

    def merge(self, other: TickInput) -> TickInput:
        return TickInput(
            left=self.left or other.left,
            right=self.right or other.right,
            up=self.up or other.up,
            down=self.down or other.down,
            confirm=self.confirm or other.confirm,
        )


NO_INPUT = TickInput()


def resolve_move(keys: TickInput) -> Vector2 | None:
    """Return the unit move for a single clean direction press.

    Any combination of directions, opposing ones included, cancels out.
    """
    match (keys.left, keys.right, keys.up, keys.down):
        case (True, False, False, False):
            return Vector2(-1, 0)
        case (False, True, False, False):
            return Vector2(1, 0)
        case (False, False, True, False):
            return Vector2(0, -1)
        case (False, False, False, True):
            return Vector2(0, 1)
        case _:
            return None


class WorldSimulation:
    """Advances a running GameWorld by one tick.

    Stateless apart from its collaborators; the world is passed in on every
    call so a reloaded level needs no reset here.
    """

    __slots__ = ("_config", "_audio")

    def __init__(self, config: GameConfig, audio: AudioSink) -> None:
        self._config = config
        self._audio = audio

    def step(self, world: GameWorld, dt: float, move: Vector2 | None) -> None:
        world.time += dt

        consumed, thrown_at = self._update_bones(world, dt, move)

        fox_moved = False
        if not consumed and move is not None:
            fox_moved = self.try_move_fox(world, move)

        advance_pugs(PugContext(
            world=world, audio=self._audio, dt=dt,
            fox_moved=fox_moved, thrown_at=thrown_at,
        ))
        removed = remove_expired_pugs(world, self._config.pug_remove_after)
        if removed:
            logger.debug("Removed %d dead pug(s)", removed)

        self._check_mail(world)
        self._check_victory(world)

    # -- phase 1 --

    def _update_bones(self, world: GameWorld, dt: float, move: Vector2 | None) -> tuple[bool, Vector2 | None]:
        """Returns (input consumed, landing tile of a bone thrown this tick)."""
        consumed = False
        thrown_at: Vector2 | None = None
        fox_pos = world.fox.pos
        for bone in world.bones:
            if bone.selected:
                if move is None:
                    continue
                consumed = True
                dest = bone.pos + move
                if world.grid.has_tile_at(dest):
                    bone.pos = dest
                    bone.selected = False
                    bone.used = True
                    bone.timer = self._config.bone_disappear_time
                    thrown_at = dest
                    logger.info("Bone thrown to %s", dest)
            elif bone.used:
                self._tick_disappearing(bone, dt)
            elif bone.pos == fox_pos:
                bone.selected = True
                consumed = True
        return consumed, thrown_at

    def _tick_disappearing(self, bone: Bone, dt: float) -> None:
        if bone.timer <= 0:
            return
        bone.timer = max(0.0, bone.timer - dt)
        if bone.timer == 0:
            bone.visible = False
            return
        interval = self._config.bone_blink_interval
        bone.visible = int(bone.timer / interval) % 2 == 0

    # -- phase 2 --

    def try_move_fox(self, world: GameWorld, move: Vector2) -> bool:
        """Move the fox by *move* if a tile exists there. Returns True on success."""
        fox = world.fox
        dest = fox.pos + move
        if not world.grid.has_tile_at(dest):
            return False
        direction = direction_from_vector(move)
        if direction is None:
            raise ValueError(f"Unexpected fox move {move!r}")
        fox.pos = dest
        fox.dir = direction
        self._audio.play(SoundCue.MOVE)
        for pug in world.alive_pugs():
            if pug.pos == dest:
                pug.life = Dead(0.0)
                logger.info("Fox took out pug at %s", dest)
                if not self._audio.is_playing(SoundCue.LOST_LEVEL):
                    self._audio.play(SoundCue.LOST_LEVEL)
        return True

    # -- phases 5 and 6 --

    def _check_mail(self, world: GameWorld) -> None:
        fox = world.fox
        if not fox.has_mail and fox.pos == world.mail.pos:
            fox.has_mail = True
            self._audio.play(SoundCue.GOT_MAIL)
            logger.info("Mail picked up at %s", fox.pos)

    def _check_victory(self, world: GameWorld) -> None:
        fox = world.fox
        if world.state is GameState.RUNNING and fox.has_mail and fox.pos == world.mailbox.pos:
            world.state = GameState.WON
            self._audio.play(SoundCue.WON_LEVEL)
            logger.info("Level '%s' won in %.2fs", world.level_name, world.time)
