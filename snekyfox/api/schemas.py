"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# --- Entities ---

class PositionSchema(BaseModel):
    x: int
    y: int


class FoxSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    facing: str
    has_mail: bool
    alive: bool
    dead_time: float = Field(0.0, description="Seconds since the fox was caught (0 while alive)")


class PugSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    facing: str
    alive: bool
    dead_time: float = 0.0
    state: str
    target: PositionSchema | None = None
    bone: PositionSchema | None = None


class BoneSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    selected: bool
    used: bool
    visible: bool
    throwable: list[PositionSchema] = Field(default_factory=list,
                                            description="Aim targets, filled only while selected")


# --- Map ---

class TileSchema(BaseModel):
    tile: int
    x: int
    y: int


class MapResponse(BaseModel):
    level: str
    width: int
    height: int
    tiles: list[TileSchema] = Field(description="Every cell in back-to-front isometric painting order")


# --- World State ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str


class WorldStateResponse(BaseModel):
    tick: int
    time: float
    state: str
    level: str
    next_level: str | None = None
    fox: FoxSchema
    mail: PositionSchema | None = Field(None, description="Absent once the fox carries the mail")
    mailbox: PositionSchema
    pugs: list[PugSchema] = Field(default_factory=list)
    bones: list[BoneSchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


# --- Input ---

class InputRequest(BaseModel):
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    confirm: bool = False


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class GameConfigResponse(BaseModel):
    start_level: str
    levels: list[str]
    bone_disappear_time: float
    bone_blink_interval: float
    pug_remove_after: float
    tick_rate: float
