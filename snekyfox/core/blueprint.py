"""Level blueprints and the atomic construction of a GameWorld from one.

A blueprint is the read-only description an external loader produces: the
tile layer plus typed point objects placed in pixel coordinates. Building a
world either succeeds completely or raises ``LevelLoadError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from snekyfox.core.enums import Direction, GameState
from snekyfox.core.grid import TileGrid
from snekyfox.core.models import Bone, Fox, Mail, Mailbox, Pug, Vector2
from snekyfox.core.world_state import GameWorld

logger = logging.getLogger(__name__)

FOX = "sneky_fox"
MAILBOX = "mailbox"
MAIL = "mail"
PUG = "pug"
BONE = "bone"

FACING_PROPERTY = "facing"
NEXT_LEVEL_PROPERTY = "next_level"


class LevelLoadError(RuntimeError):
    """A level could not be read or lacks a required object."""


@dataclass(frozen=True, slots=True)
class BlueprintObject:
    """A typed point object placed in the level editor (pixel coordinates)."""

    kind: str
    x: float
    y: float
    properties: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LevelBlueprint:
    """Everything needed to (re)build one level."""

    name: str
    width: int
    height: int
    tiles: tuple[int, ...]
    tile_width: int = 180
    tile_height: int = 90
    objects: tuple[BlueprintObject, ...] = ()
    properties: Mapping[str, str] = field(default_factory=dict)

    @property
    def next_level(self) -> str | None:
        value = self.properties.get(NEXT_LEVEL_PROPERTY)
        return value or None

    def grid_position(self, obj: BlueprintObject) -> Vector2:
        """Convert an object's pixel position to grid coordinates.

        Isometric maps place objects on a half-tile-wide horizontal pitch.
        """
        return Vector2(int(obj.x) // (self.tile_width // 2), int(obj.y) // self.tile_height)

    def objects_of(self, kind: str) -> list[BlueprintObject]:
        return [o for o in self.objects if o.kind == kind]


def _facing(obj: BlueprintObject, default: Direction) -> Direction:
    return Direction.from_name(obj.properties.get(FACING_PROPERTY)) or default


def _require(blueprint: LevelBlueprint, kind: str) -> BlueprintObject:
    for obj in blueprint.objects:
        if obj.kind == kind:
            return obj
    raise LevelLoadError(f'Could not load "{kind}" from level {blueprint.name}')


def build_world(blueprint: LevelBlueprint, state: GameState = GameState.RUNNING) -> GameWorld:
    """Construct a fresh GameWorld from *blueprint*.

    Raises ``LevelLoadError`` when the fox, mailbox or mail is missing.
    """
    fox_obj = _require(blueprint, FOX)
    mailbox_obj = _require(blueprint, MAILBOX)
    mail_obj = _require(blueprint, MAIL)

    fox = Fox(pos=blueprint.grid_position(fox_obj), dir=_facing(fox_obj, Direction.NORTH))
    mailbox = Mailbox(pos=blueprint.grid_position(mailbox_obj))
    mail = Mail(pos=blueprint.grid_position(mail_obj))
    pugs = [
        Pug(pos=blueprint.grid_position(o), dir=_facing(o, Direction.SOUTH))
        for o in blueprint.objects_of(PUG)
    ]
    bones = [Bone(pos=blueprint.grid_position(o)) for o in blueprint.objects_of(BONE)]

    world = GameWorld(
        level_name=blueprint.name,
        grid=TileGrid(blueprint.width, blueprint.height, blueprint.tiles),
        fox=fox,
        mailbox=mailbox,
        mail=mail,
        pugs=pugs,
        bones=bones,
        next_level=blueprint.next_level,
        state=state,
    )
    logger.info("Built level '%s' (%dx%d): fox at %s, %d pugs, %d bones",
                blueprint.name, blueprint.width, blueprint.height, fox.pos, len(pugs), len(bones))
    return world


def frozen_properties(props: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(props or {}))
