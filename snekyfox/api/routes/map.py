"""GET /api/v1/map — the current level's tiles in painting order (fetch once per level)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from snekyfox.api.dependencies import get_game_manager
from snekyfox.api.game_manager import GameManager
from snekyfox.api.schemas import MapResponse, TileSchema

router = APIRouter()


@router.get("/map", response_model=MapResponse)
def get_map(manager: GameManager = Depends(get_game_manager)) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Game not initialized yet.")

    grid = snapshot.grid
    return MapResponse(
        level=snapshot.level_name,
        width=grid.width,
        height=grid.height,
        tiles=[TileSchema(tile=t, x=x, y=y) for t, x, y in grid.iter_tiles_diagonal()],
    )
