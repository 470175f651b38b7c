"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from paradesim import __version__
from paradesim.api.dependencies import Services, set_services
from paradesim.api.routes import api_router
from paradesim.config import EngineConfig
from paradesim.core.errors import (
    ActionOverlapError,
    InvalidActionError,
    ParadeNotFoundError,
    UnknownActionError,
    UnknownOwnerError,
)
from paradesim.engine.playback import NoParadeLoadedError, PlaybackClock
from paradesim.utils.logging import setup_logging
from paradesim.utils.storage import ParadeStore

logger = logging.getLogger(__name__)


def create_app(config: EngineConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = EngineConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level, _config.frame_debug)
        clock = PlaybackClock(_config)
        store = ParadeStore(_config.storage_dir, _config.max_save_slots)
        set_services(Services(config=_config, clock=clock, store=store))
        clock.start()
        logger.info("API server started — playback clock running.")
        yield
        clock.stop()
        set_services(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Parade Ground Planner",
        description=(
            "Timeline evaluation engine for parade formations.\n\n"
            "## API Groups\n\n"
            "- **Evaluate** — Stateless: evaluate any parade at any time, trace action paths\n"
            "- **Editing** — Stateless timeline edits: add, retime, remove actions\n"
            "- **Playback** — Server-side playback clock: load, play, pause, resume, seek\n"
            "- **Parades** — Saved parade slots\n"
            "- **Config** — Read-only engine configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Evaluate", "description": "Pure timeline evaluation and path traces. Same function the playback clock uses."},
            {"name": "Editing", "description": "Add, retime and remove actions on a posted parade; overlaps are rejected with 409."},
            {"name": "Playback", "description": "Playback clock controls and the latest evaluated frame."},
            {"name": "Parades", "description": "Save, list, load and delete parades (newest first, limited slots)."},
            {"name": "Config", "description": "Read-only engine configuration (frame rate, epsilon, trace samples)."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NoParadeLoadedError)
    async def _no_parade(request: Request, exc: NoParadeLoadedError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(ParadeNotFoundError)
    @app.exception_handler(UnknownOwnerError)
    @app.exception_handler(UnknownActionError)
    async def _not_found(request: Request, exc: KeyError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": f"Not found: {exc.args[0] if exc.args else ''}"})

    @app.exception_handler(ActionOverlapError)
    async def _overlap(request: Request, exc: ActionOverlapError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(InvalidActionError)
    async def _invalid(request: Request, exc: InvalidActionError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    app.include_router(api_router)

    return app
