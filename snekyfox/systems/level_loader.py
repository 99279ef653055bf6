"""Level sources — produce LevelBlueprints by name.

``TiledLevelLoader`` reads maps exported from the Tiled editor in its JSON
format; ``InMemoryLevels`` serves prebuilt blueprints (tests, tools).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol

from snekyfox.core.blueprint import (
    BlueprintObject,
    LevelBlueprint,
    LevelLoadError,
    frozen_properties,
)

logger = logging.getLogger(__name__)


class LevelSource(Protocol):
    def load(self, name: str) -> LevelBlueprint: ...

    def available(self) -> list[str]: ...


def _properties(raw: Any) -> dict[str, str]:
    """Tiled stores custom properties as ``[{name, type, value}, ...]``.

    Older exports use a plain ``{name: value}`` mapping; both are accepted.
    Only string values are kept.
    """
    if isinstance(raw, dict):
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}
    props: dict[str, str] = {}
    for entry in raw or ():
        if isinstance(entry, dict) and isinstance(entry.get("value"), str):
            props[str(entry.get("name", ""))] = entry["value"]
    return props


def parse_tiled_map(name: str, data: Mapping[str, Any]) -> LevelBlueprint:
    """Convert a decoded Tiled JSON map into a blueprint.

    Uses the first tile layer and the first object group, like the game's
    level files always have.
    """
    try:
        width = int(data["width"])
        height = int(data["height"])
        layers = list(data.get("layers", ()))
        tile_layer = next(layer for layer in layers if layer.get("type") == "tilelayer")
        tiles = tuple(int(t) for t in tile_layer["data"])
    except (KeyError, TypeError, ValueError, AttributeError, StopIteration) as exc:
        raise LevelLoadError(f"Malformed tile data in level {name}: {exc!r}") from exc

    if len(tiles) != width * height:
        raise LevelLoadError(
            f"Level {name} has {len(tiles)} tiles, expected {width}x{height}")

    try:
        objects: list[BlueprintObject] = []
        group = next((layer for layer in layers if layer.get("type") == "objectgroup"), None)
        for obj in (group or {}).get("objects", ()):
            kind = obj.get("type") or obj.get("class") or ""
            objects.append(BlueprintObject(
                kind=str(kind),
                x=float(obj.get("x", 0.0)),
                y=float(obj.get("y", 0.0)),
                properties=frozen_properties(_properties(obj.get("properties"))),
            ))
        tile_width = int(data.get("tilewidth", 180))
        tile_height = int(data.get("tileheight", 90))
        properties = frozen_properties(_properties(data.get("properties")))
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise LevelLoadError(f"Malformed object data in level {name}: {exc!r}") from exc

    return LevelBlueprint(
        name=name,
        width=width,
        height=height,
        tiles=tiles,
        tile_width=tile_width,
        tile_height=tile_height,
        objects=tuple(objects),
        properties=properties,
    )


class TiledLevelLoader:
    """Loads ``<levels_dir>/<name>.json`` on every call; nothing is cached."""

    __slots__ = ("_dir",)

    def __init__(self, levels_dir: str | Path) -> None:
        self._dir = Path(levels_dir)

    def path_for(self, name: str) -> Path:
        return self._dir / f"{name}.json"

    def load(self, name: str) -> LevelBlueprint:
        path = self.path_for(name)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise LevelLoadError(f"Could not read level file {path}") from exc
        except json.JSONDecodeError as exc:
            raise LevelLoadError(f"Could not parse level file {path}: {exc}") from exc
        blueprint = parse_tiled_map(name, data)
        logger.info("Loaded level '%s' from %s", name, path)
        return blueprint

    def available(self) -> list[str]:
        return sorted(p.stem for p in self._dir.glob("*.json"))


class InMemoryLevels:
    """A level source backed by a name → blueprint mapping."""

    __slots__ = ("_levels",)

    def __init__(self, levels: Mapping[str, LevelBlueprint] | None = None) -> None:
        self._levels: dict[str, LevelBlueprint] = dict(levels or {})

    def add(self, blueprint: LevelBlueprint) -> None:
        self._levels[blueprint.name] = blueprint

    def load(self, name: str) -> LevelBlueprint:
        try:
            return self._levels[name]
        except KeyError:
            raise LevelLoadError(f"Unknown level {name}") from None

    def available(self) -> list[str]:
        return sorted(self._levels)
