"""GET /api/v1/state — dynamic entity & event data (polled every frame)."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Query

from snekyfox.api.dependencies import get_game_manager
from snekyfox.api.game_manager import GameManager
from snekyfox.api.schemas import (
    BoneSchema,
    EventSchema,
    FoxSchema,
    PositionSchema,
    PugSchema,
    WorldStateResponse,
)
from snekyfox.core.grid import TileGrid
from snekyfox.core.models import Alerted, Alive, Bone, Dead, Fox, Guarding, Life, Pug, Surprised, Vector2
from snekyfox.utils.event_feed import SOUND, STATE

router = APIRouter()


class EventCategory(str, Enum):
    sound = SOUND
    state = STATE


def _pos(v: Vector2) -> PositionSchema:
    return PositionSchema(x=v.x, y=v.y)


def _dead_time(life: Life) -> float:
    match life:
        case Alive():
            return 0.0
        case Dead(elapsed=elapsed):
            return elapsed


def _serialize_fox(fox: Fox) -> FoxSchema:
    return FoxSchema(
        x=fox.pos.x, y=fox.pos.y, facing=fox.dir.name.lower(),
        has_mail=fox.has_mail, alive=fox.alive, dead_time=_dead_time(fox.life),
    )


def _serialize_pug(pug: Pug) -> PugSchema:
    target = bone = None
    match pug.state:
        case Guarding():
            state = "guarding"
        case Surprised(bone=b):
            state, bone = "surprised", _pos(b)
        case Alerted(target=t, bone=b):
            state, target, bone = "alerted", _pos(t), _pos(b)
    return PugSchema(
        x=pug.pos.x, y=pug.pos.y, facing=pug.dir.name.lower(),
        alive=pug.alive, dead_time=_dead_time(pug.life),
        state=state, target=target, bone=bone,
    )


def _serialize_bone(bone: Bone, grid: TileGrid) -> BoneSchema:
    throwable = [_pos(p) for p in bone.throwable_positions(grid)] if bone.is_selected() else []
    return BoneSchema(
        x=bone.pos.x, y=bone.pos.y,
        selected=bone.is_selected(), used=bone.is_used(), visible=bone.is_visible(),
        throwable=throwable,
    )


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    category: EventCategory | None = Query(None, description="Only return events of this category"),
    manager: GameManager = Depends(get_game_manager),
) -> WorldStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    events = [
        EventSchema(tick=ev.tick, category=ev.category, message=ev.message)
        for ev in manager.events.since_tick(since_tick, category.value if category else None)
    ]

    return WorldStateResponse(
        tick=snapshot.tick,
        time=snapshot.time,
        state=snapshot.state.name.lower(),
        level=snapshot.level_name,
        next_level=snapshot.next_level,
        fox=_serialize_fox(snapshot.fox),
        mail=None if snapshot.fox.has_mail else _pos(snapshot.mail.pos),
        mailbox=_pos(snapshot.mailbox.pos),
        pugs=[_serialize_pug(p) for p in snapshot.pugs],
        bones=[_serialize_bone(b, snapshot.grid) for b in snapshot.bones],
        events=events,
    )
