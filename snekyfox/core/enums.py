"""Enumerations used throughout the game."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal facing / movement directions."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3

    @classmethod
    def from_name(cls, name: str | None) -> Direction | None:
        """Parse a level orientation string (``"north"`` etc.); None if unrecognized."""
        if not isinstance(name, str):
            return None
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return None


@unique
class GameState(IntEnum):
    """Top-level level lifecycle states."""

    START_MENU = 0
    RUNNING = 1
    WON = 2
    GAME_OVER = 3
    CREDITS = 4


@unique
class SoundCue(IntEnum):
    """Named audio cues emitted by the simulation."""

    MOVE = 0
    BARK = 1          # Pug caught the fox
    GOT_MAIL = 2
    WON_LEVEL = 3
    LOST_LEVEL = 4
