"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from snekyfox.api.dependencies import get_game_manager
from snekyfox.api.game_manager import GameManager
from snekyfox.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: GameManager = Depends(get_game_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        start_level=cfg.start_level,
        levels=manager.available_levels(),
        bone_disappear_time=cfg.bone_disappear_time,
        bone_blink_interval=cfg.bone_blink_interval,
        pug_remove_after=cfg.pug_remove_after,
        tick_rate=manager.tick_rate,
    )
