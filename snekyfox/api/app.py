"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snekyfox.api.dependencies import set_game_manager
from snekyfox.api.game_manager import GameManager
from snekyfox.api.routes import api_router
from snekyfox.config import GameConfig
from snekyfox.systems.level_loader import LevelSource
from snekyfox.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    config: GameConfig | None = None,
    levels: LevelSource | None = None,
    autostart: bool = True,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = GameManager(_config, levels)
        set_game_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started — level '%s' loaded.", _config.start_level)
        yield
        manager.stop()
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Sneky Fox",
        description=(
            "Sneky Fox game server — snapshot API for rendering clients.\n\n"
            "## API Groups\n\n"
            "- **Map** — Current level tiles in isometric painting order\n"
            "- **State** — Fox, pugs, bones, game state and sound/state events\n"
            "- **Input** — Key presses for the next tick\n"
            "- **Control** — Game loop lifecycle: start, pause, resume, step, reset\n"
            "- **Config** — Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Map", "description": "Tiles of the current level; refetch when the level name changes."},
            {"name": "State", "description": "Live game state polled by the client every frame."},
            {"name": "Input", "description": "Directional and confirm key presses."},
            {"name": "Control", "description": "Game loop lifecycle controls."},
            {"name": "Config", "description": "Read-only game configuration."},
        ],
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
