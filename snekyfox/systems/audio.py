"""Audio sinks — one-way receivers of simulation sound cues."""

from __future__ import annotations

import logging
from typing import Mapping, Protocol

from snekyfox.core.enums import SoundCue
from snekyfox.utils.event_feed import SOUND, EventFeed, GameEvent

logger = logging.getLogger(__name__)


class AudioSink(Protocol):
    """Fire-and-forget cue player.

    ``is_playing`` is the only thing the simulation ever reads back.
    """

    def play(self, cue: SoundCue) -> None: ...

    def is_playing(self, cue: SoundCue) -> bool: ...


class NullAudio:
    """Discards every cue."""

    def play(self, cue: SoundCue) -> None:
        pass

    def is_playing(self, cue: SoundCue) -> bool:
        return False


class RecordingAudio:
    """Keeps every played cue and tracks which ones are still sounding.

    Cue lengths come from the game config; ``advance`` runs the clock.
    When an EventFeed is attached each cue is also published as a ``sound``
    event for API clients.
    """

    __slots__ = ("_lengths", "_remaining", "_feed", "played", "tick")

    def __init__(
        self,
        cue_lengths: Mapping[SoundCue, float] | None = None,
        feed: EventFeed | None = None,
    ) -> None:
        self._lengths = dict(cue_lengths or {})
        self._remaining: dict[SoundCue, float] = {}
        self._feed = feed
        self.played: list[SoundCue] = []
        self.tick = 0

    def play(self, cue: SoundCue) -> None:
        self.played.append(cue)
        length = self._lengths.get(cue, 0.0)
        if length > 0:
            self._remaining[cue] = length
        logger.debug("Cue %s", cue.name)
        if self._feed is not None:
            self._feed.append(GameEvent(tick=self.tick, category=SOUND, message=cue.name.lower()))

    def is_playing(self, cue: SoundCue) -> bool:
        return self._remaining.get(cue, 0.0) > 0

    def advance(self, dt: float) -> None:
        for cue in list(self._remaining):
            left = self._remaining[cue] - dt
            if left > 0:
                self._remaining[cue] = left
            else:
                del self._remaining[cue]

    def count(self, cue: SoundCue) -> int:
        return self.played.count(cue)

    def clear(self) -> None:
        self.played.clear()
        self._remaining.clear()
