"""FastAPI API endpoints under /api.

Endpoint groups: modules (install/uninstall) and characters (create, inspect,
viewpoint, take action). Every request builds its own Game from the shared
Storage, so nothing game-related outlives a request.
"""

from fastapi import APIRouter

from .characters import router as characters_router
from .modules import router as modules_router

router = APIRouter()
router.include_router(modules_router)
router.include_router(characters_router)
