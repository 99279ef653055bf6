"""POST /api/v1/input — key presses consumed by the next tick."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from snekyfox.api.dependencies import get_game_manager
from snekyfox.api.game_manager import GameManager
from snekyfox.api.schemas import ControlResponse, InputRequest
from snekyfox.engine.simulation import TickInput

router = APIRouter()


@router.post("/input", response_model=ControlResponse)
def press_keys(
    body: InputRequest,
    manager: GameManager = Depends(get_game_manager),
) -> ControlResponse:
    manager.press(TickInput(
        left=body.left, right=body.right,
        up=body.up, down=body.down,
        confirm=body.confirm,
    ))
    snapshot = manager.get_snapshot()
    return ControlResponse(status="ok", message="Input queued.", tick=snapshot.tick if snapshot else 0)
