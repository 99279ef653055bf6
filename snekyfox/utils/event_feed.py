"""Game event feed polled by API clients: cues played and state changes."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

SOUND = "sound"
STATE = "state"


@dataclass(frozen=True, slots=True)
class GameEvent:
    tick: int
    category: str      # SOUND or STATE
    message: str


class EventFeed:
    """Bounded, lock-guarded feed; the oldest events drop off at *maxlen*.

    The engine thread appends a few events per tick; HTTP handlers read copies.
    """

    __slots__ = ("_events", "_lock")

    def __init__(self, maxlen: int = 2000) -> None:
        self._events: deque[GameEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: GameEvent) -> None:
        with self._lock:
            self._events.append(event)

    def since_tick(self, tick: int, category: str | None = None) -> list[GameEvent]:
        """Events with ``event.tick >= tick``, optionally of one category only."""
        with self._lock:
            items = list(self._events)
        return [e for e in items if e.tick >= tick and (category is None or e.category == category)]

    def latest(self, count: int = 50) -> list[GameEvent]:
        with self._lock:
            items = list(self._events)
        return items[-count:]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
