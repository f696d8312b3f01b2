"""FastAPI API endpoints under /api.

Endpoint groups: health/settings and games. Every game endpoint is nested
under /api/games/{game_id}/ and looks the session up in the SessionRegistry
held on app.state.
"""

from fastapi import APIRouter

from .games import router as games_router
from .settings import router as settings_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(games_router)
