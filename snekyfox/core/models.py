"""Core data models: Vector2, life / AI state variants, and the level entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from snekyfox.core.enums import Direction

if TYPE_CHECKING:
    from snekyfox.core.grid import TileGrid


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


# Direction offsets; y grows toward the south.
DIRECTION_OFFSETS: dict[Direction, Vector2] = {
    Direction.NORTH: Vector2(0, -1),
    Direction.SOUTH: Vector2(0, 1),
    Direction.EAST: Vector2(1, 0),
    Direction.WEST: Vector2(-1, 0),
}

_OFFSET_DIRECTIONS: dict[Vector2, Direction] = {v: d for d, v in DIRECTION_OFFSETS.items()}


def direction_from_vector(vec: Vector2) -> Direction | None:
    """Return the direction of a unit axis vector, None for diagonal or zero vectors."""
    return _OFFSET_DIRECTIONS.get(vec)


# ---------------------------------------------------------------------------
# Life status: Alive | Dead(elapsed)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Alive:
    pass


@dataclass(frozen=True, slots=True)
class Dead:
    """Dead, carrying the time elapsed since the kill (drives death animations)."""

    elapsed: float = 0.0


Life = Union[Alive, Dead]

ALIVE = Alive()


def advance_life(life: Life, dt: float) -> Life:
    match life:
        case Alive():
            return life
        case Dead(elapsed=elapsed):
            return Dead(elapsed + dt)


# ---------------------------------------------------------------------------
# Pug AI state: Guarding | Surprised(bone) | Alerted(target, bone)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Guarding:
    """Stationary, watching the single tile in front of the pug."""


@dataclass(frozen=True, slots=True)
class Surprised:
    """Just noticed a bone landing nearby."""

    bone: Vector2


@dataclass(frozen=True, slots=True)
class Alerted:
    """Moving to *target* on the way to investigate the bone at *bone*."""

    target: Vector2
    bone: Vector2


PugState = Union[Guarding, Surprised, Alerted]

GUARDING = Guarding()


def state_name(state: PugState) -> str:
    match state:
        case Guarding():
            return "GUARDING"
        case Surprised():
            return "SURPRISED"
        case Alerted():
            return "ALERTED"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Fox:
    """The player character."""

    pos: Vector2
    dir: Direction = Direction.NORTH
    has_mail: bool = False
    life: Life = ALIVE

    @property
    def alive(self) -> bool:
        return isinstance(self.life, Alive)

    def copy(self) -> Fox:
        return Fox(pos=self.pos, dir=self.dir, has_mail=self.has_mail, life=self.life)


@dataclass(slots=True)
class Pug:
    """A guard dog watching the tile it faces."""

    pos: Vector2
    dir: Direction = Direction.SOUTH
    life: Life = ALIVE
    state: PugState = GUARDING

    @property
    def alive(self) -> bool:
        return isinstance(self.life, Alive)

    @property
    def watch_vector(self) -> Vector2:
        return DIRECTION_OFFSETS[self.dir]

    def copy(self) -> Pug:
        return Pug(pos=self.pos, dir=self.dir, life=self.life, state=self.state)


@dataclass(slots=True)
class Bone:
    """A throwable distraction.

    ``selected`` means the fox stands on it and is aiming; ``used`` means it
    has been thrown and is counting down to disappear. The two never hold
    at the same time.
    """

    pos: Vector2
    selected: bool = False
    used: bool = False
    visible: bool = True
    timer: float = 0.0

    def is_selected(self) -> bool:
        return self.selected

    def is_used(self) -> bool:
        return self.used

    def is_visible(self) -> bool:
        return self.visible

    def throwable_positions(self, grid: TileGrid) -> list[Vector2]:
        """Tiles the bone could land on from its current position."""
        return grid.adjacent_eight(self.pos)

    def copy(self) -> Bone:
        return Bone(pos=self.pos, selected=self.selected, used=self.used,
                    visible=self.visible, timer=self.timer)


@dataclass(frozen=True, slots=True)
class Mail:
    pos: Vector2


@dataclass(frozen=True, slots=True)
class Mailbox:
    pos: Vector2
