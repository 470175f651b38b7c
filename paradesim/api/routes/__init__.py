"""Versioned API route modules."""

from fastapi import APIRouter

from paradesim.api.routes.config import router as config_router
from paradesim.api.routes.editing import router as editing_router
from paradesim.api.routes.evaluate import router as evaluate_router
from paradesim.api.routes.parades import router as parades_router
from paradesim.api.routes.playback import router as playback_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(evaluate_router, tags=["Evaluate"])
api_router.include_router(editing_router, tags=["Editing"])
api_router.include_router(playback_router, tags=["Playback"])
api_router.include_router(parades_router, tags=["Parades"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
