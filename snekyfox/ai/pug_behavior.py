"""Pug guard AI — a three-state machine driven by fox moves and bone throws.

State machine:
  GUARDING → SURPRISED(bone)           a bone lands in the pug's 8-neighbourhood
  SURPRISED → ALERTED(bone, bone)      watched tile is the bone or touches it
  SURPRISED → ALERTED(step, bone)      a neighbouring tile of the pug touches the bone
  SURPRISED → GUARDING                 nothing lines up
  SURPRISED → SURPRISED                watched tile is off the grid (held this tick)
  ALERTED(t, b) → ALERTED(b, b)        fox moved; pug jumps to t (t != b)
  ALERTED(b, b) → GUARDING             fox moved; pug jumps onto the bone

While GUARDING, a fox that moves onto the watched tile is caught. An ALERTED
pug that jumps onto the fox's tile catches it too.

Every handler matches the closed PugState variant set; there is no subclassing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from snekyfox.core.enums import GameState, SoundCue
from snekyfox.core.models import (
    GUARDING,
    Alerted,
    Alive,
    Dead,
    Guarding,
    Pug,
    PugState,
    Surprised,
    Vector2,
    advance_life,
    direction_from_vector,
    state_name,
)
from snekyfox.core.world_state import GameWorld
from snekyfox.systems.audio import AudioSink

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PugContext:
    """Signals and collaborators for one tick of pug AI."""

    world: GameWorld
    audio: AudioSink
    dt: float = 0.0
    fox_moved: bool = False
    thrown_at: Vector2 | None = None


# =====================================================================
# Shared helpers
# =====================================================================

def watched_tile(pug: Pug, world: GameWorld) -> Vector2 | None:
    """The tile in front of *pug*, or None when it would fall off the grid."""
    tile = pug.pos + pug.watch_vector
    if not world.grid.in_bounds(tile.x, tile.y):
        return None
    return tile


def face_toward(pug: Pug, target: Vector2) -> None:
    """Turn *pug* toward an orthogonally adjacent *target*; other offsets keep the facing."""
    direction = direction_from_vector(target - pug.pos)
    if direction is not None:
        pug.dir = direction


def kill_fox(world: GameWorld, audio: AudioSink) -> None:
    """Catch the fox: it dies, the death clock starts and the level is lost."""
    world.fox.life = Dead(0.0)
    world.time = 0.0
    world.state = GameState.GAME_OVER
    audio.play(SoundCue.BARK)
    logger.info("Fox caught at %s on level '%s'", world.fox.pos, world.level_name)


def hears_bone(pug: Pug, world: GameWorld, bone: Vector2) -> bool:
    return pug.pos in world.grid.adjacent_eight(bone)


# =====================================================================
# Per-state handlers
# =====================================================================

def _guarding(pug: Pug, ctx: PugContext) -> PugState:
    fox = ctx.world.fox
    if ctx.fox_moved and fox.alive and watched_tile(pug, ctx.world) == fox.pos:
        pug.pos = fox.pos
        kill_fox(ctx.world, ctx.audio)
    return GUARDING


def _surprised(pug: Pug, bone: Vector2, ctx: PugContext) -> PugState:
    watched = watched_tile(pug, ctx.world)
    if watched is None:
        # Facing off the grid: hold this tick.
        return Surprised(bone)
    grid = ctx.world.grid
    near_bone = grid.adjacent_four(bone)
    if watched == bone or watched in near_bone:
        return Alerted(bone, bone)
    for step in grid.adjacent_four(pug.pos):
        if step in near_bone:
            face_toward(pug, step)
            return Alerted(step, bone)
    return GUARDING


def _alerted(pug: Pug, state: Alerted, ctx: PugContext) -> PugState:
    if not ctx.fox_moved:
        return state
    fox = ctx.world.fox
    face_toward(pug, state.target)
    pug.pos = state.target
    if fox.alive and state.target == fox.pos:
        kill_fox(ctx.world, ctx.audio)
    if state.target == state.bone:
        return GUARDING
    return Alerted(state.bone, state.bone)


def step_pug(pug: Pug, ctx: PugContext) -> PugState:
    """Compute (and apply the movement side effects of) one tick for a live pug."""
    state = pug.state
    match state:
        case Guarding():
            if ctx.thrown_at is not None and hears_bone(pug, ctx.world, ctx.thrown_at):
                return Surprised(ctx.thrown_at)
            return _guarding(pug, ctx)
        case Surprised(bone=bone):
            return _surprised(pug, bone, ctx)
        case Alerted():
            return _alerted(pug, state, ctx)


def advance_pugs(ctx: PugContext) -> None:
    """Run one AI tick for every pug; dead pugs only age their dead-timer."""
    for pug in ctx.world.pugs:
        match pug.life:
            case Dead():
                pug.life = advance_life(pug.life, ctx.dt)
            case Alive():
                previous = pug.state
                pug.state = step_pug(pug, ctx)
                if pug.state != previous:
                    logger.debug("Pug at %s: %s -> %s", pug.pos, state_name(previous), state_name(pug.state))


def remove_expired_pugs(world: GameWorld, remove_after: float) -> int:
    """Drop pugs that have been dead for at least *remove_after*. Returns how many."""
    kept: list[Pug] = []
    for pug in world.pugs:
        match pug.life:
            case Dead(elapsed=elapsed) if elapsed >= remove_after:
                continue
            case _:
                kept.append(pug)
    removed = len(world.pugs) - len(kept)
    world.pugs = kept
    return removed
