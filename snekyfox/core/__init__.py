"""Core data models and world representation."""

from snekyfox.core.enums import Direction, GameState, SoundCue
from snekyfox.core.models import (
    Alerted, Alive, Bone, Dead, Fox, Guarding, Mail, Mailbox, Pug, Surprised, Vector2,
)
from snekyfox.core.grid import TileGrid
from snekyfox.core.world_state import GameWorld
from snekyfox.core.blueprint import BlueprintObject, LevelBlueprint, LevelLoadError, build_world
from snekyfox.core.snapshot import Snapshot

__all__ = [
    "Alerted",
    "Alive",
    "BlueprintObject",
    "Bone",
    "Dead",
    "Direction",
    "Fox",
    "GameState",
    "GameWorld",
    "Guarding",
    "LevelBlueprint",
    "LevelLoadError",
    "Mail",
    "Mailbox",
    "Pug",
    "Snapshot",
    "SoundCue",
    "Surprised",
    "TileGrid",
    "Vector2",
    "build_world",
]
