"""Immutable snapshot of the game for rendering clients."""

from __future__ import annotations

from dataclasses import dataclass

from snekyfox.core.enums import GameState
from snekyfox.core.grid import TileGrid
from snekyfox.core.models import Bone, Fox, Mail, Mailbox, Pug
from snekyfox.core.world_state import GameWorld


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the world, safe to hand to another thread.

    Entities are copied; the grid is shared because it never changes within
    a level.
    """

    tick: int
    time: float
    state: GameState
    level_name: str
    next_level: str | None
    grid: TileGrid
    fox: Fox
    mailbox: Mailbox
    mail: Mail
    pugs: tuple[Pug, ...]
    bones: tuple[Bone, ...]

    @classmethod
    def from_world(cls, world: GameWorld) -> Snapshot:
        return cls(
            tick=world.tick,
            time=world.time,
            state=world.state,
            level_name=world.level_name,
            next_level=world.next_level,
            grid=world.grid,
            fox=world.fox.copy(),
            mailbox=world.mailbox,
            mail=world.mail,
            pugs=tuple(p.copy() for p in world.pugs),
            bones=tuple(b.copy() for b in world.bones),
        )
