"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from snekyfox.core.enums import SoundCue

LEVELS_DIR = Path(__file__).resolve().parent.parent / "levels"


def _default_cue_lengths() -> Mapping[SoundCue, float]:
    return MappingProxyType({
        SoundCue.MOVE: 0.2,
        SoundCue.BARK: 0.8,
        SoundCue.GOT_MAIL: 0.6,
        SoundCue.WON_LEVEL: 2.0,
        SoundCue.LOST_LEVEL: 1.2,
    })


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # Levels
    levels_dir: str = str(LEVELS_DIR)
    start_level: str = "level_1"

    # Bones
    bone_disappear_time: float = 1.5     # Seconds a thrown bone stays before vanishing
    bone_blink_interval: float = 0.1     # Half-period of the disappearing blink

    # Pugs
    pug_remove_after: float = 1.0        # Dead time before a pug leaves the level

    # Audio: how long each cue counts as "playing". Read-only; left out of the hash.
    cue_lengths: Mapping[SoundCue, float] = field(default_factory=_default_cue_lengths, hash=False)

    # Server loop
    tick_rate: float = 1.0 / 30.0        # Seconds between ticks

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not isinstance(self.cue_lengths, MappingProxyType):
            object.__setattr__(self, "cue_lengths", MappingProxyType(dict(self.cue_lengths)))
