"""Mutable authoritative level state — only mutated by the simulation step."""

from __future__ import annotations

from snekyfox.core.enums import GameState
from snekyfox.core.grid import TileGrid
from snekyfox.core.models import Bone, Fox, Mail, Mailbox, Pug


class GameWorld:
    """The single source of truth for one loaded level.

    Built wholesale from a level blueprint and thrown away on every level
    transition; nothing here is reset in place.
    """

    __slots__ = (
        "state", "fox", "mailbox", "mail", "grid", "pugs", "bones",
        "time", "tick", "level_name", "next_level",
    )

    def __init__(
        self,
        *,
        level_name: str,
        grid: TileGrid,
        fox: Fox,
        mailbox: Mailbox,
        mail: Mail,
        pugs: list[Pug] | None = None,
        bones: list[Bone] | None = None,
        next_level: str | None = None,
        state: GameState = GameState.RUNNING,
    ) -> None:
        self.state: GameState = state
        self.fox: Fox = fox
        self.mailbox: Mailbox = mailbox
        self.mail: Mail = mail
        self.grid: TileGrid = grid
        self.pugs: list[Pug] = list(pugs or [])
        self.bones: list[Bone] = list(bones or [])
        self.time: float = 0.0
        self.tick: int = 0
        self.level_name: str = level_name
        self.next_level: str | None = next_level

    def alive_pugs(self) -> list[Pug]:
        return [p for p in self.pugs if p.alive]

    def __repr__(self) -> str:
        return (f"GameWorld(level={self.level_name!r}, state={self.state.name}, "
                f"fox={self.fox.pos}, pugs={len(self.pugs)}, bones={len(self.bones)})")
