"""Tile grid and its isometric painting order."""

from __future__ import annotations

from typing import Iterator, Sequence

from snekyfox.core.models import Vector2

# Scan order for the four cardinal neighbours: N, S, E, W.
_FOUR = (Vector2(0, -1), Vector2(0, 1), Vector2(1, 0), Vector2(-1, 0))
_EIGHT = tuple(Vector2(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy)


class TileGrid:
    """2D tile-id grid backed by a flat list. Tile id 0 means no tile."""

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, width: int, height: int, tiles: Sequence[int] | None = None) -> None:
        if tiles is None:
            tiles = [0] * (width * height)
        if len(tiles) != width * height:
            raise ValueError(f"expected {width * height} tiles, got {len(tiles)}")
        self.width = width
        self.height = height
        self._tiles: tuple[int, ...] = tuple(int(t) for t in tiles)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> TileGrid:
        height = len(rows)
        width = len(rows[0]) if height else 0
        flat: list[int] = []
        for row in rows:
            if len(row) != width:
                raise ValueError("grid rows must all have the same length")
            flat.extend(row)
        return cls(width, height, flat)

    # -- access --

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            return 0
        return self._tiles[y * self.width + x]

    def has_tile(self, x: int, y: int) -> bool:
        return self.get_tile(x, y) != 0

    def has_tile_at(self, pos: Vector2) -> bool:
        return self.get_tile(pos.x, pos.y) != 0

    # -- neighbourhoods --

    def adjacent_four(self, pos: Vector2) -> list[Vector2]:
        """Existing-tile cardinal neighbours of *pos*."""
        return [pos + d for d in _FOUR if self.has_tile_at(pos + d)]

    def adjacent_eight(self, pos: Vector2) -> list[Vector2]:
        """Existing-tile neighbours of *pos*, diagonals included."""
        return [pos + d for d in _EIGHT if self.has_tile_at(pos + d)]

    # -- traversal --

    def iter_tiles_diagonal(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(tile_id, x, y)`` for every cell in back-to-front isometric order.

        Cells are grouped by anti-diagonal ``x + y``; within a diagonal the walk
        goes up and to the right (decreasing y). Each strip starts down the left
        column until the rows run out, then along the bottom row.
        """
        if self.width == 0 or self.height == 0:
            return
        x = y = 0
        start_x = start_y = 0
        while self.in_bounds(x, y):
            yield self.get_tile(x, y), x, y
            if x < self.width - 1 and y > 0:
                x, y = x + 1, y - 1
            elif start_y < self.height - 1:
                start_y += 1
                x, y = start_x, start_y
            else:
                start_x += 1
                x, y = start_x, start_y

    def __repr__(self) -> str:
        return f"TileGrid({self.width}x{self.height})"
