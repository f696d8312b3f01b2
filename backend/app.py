import logging

from fastapi import FastAPI

from backend.registry import SessionRegistry
from backend.routes import router
from mugloar.client import GameApiClient
from mugloar.config import Settings


def create_app(
    settings: Settings | None = None,
    registry: SessionRegistry | None = None,
) -> FastAPI:
    resolved = settings or Settings.from_env()
    logging.getLogger("mugloar").setLevel(resolved.log_level.upper())

    if registry is None:
        registry = SessionRegistry(
            lambda: GameApiClient(resolved.api_url, timeout=resolved.timeout),
            ttl_seconds=resolved.session_ttl,
        )

    app = FastAPI(title="Mugloar Bot")
    app.state.settings = resolved
    app.state.registry = registry
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (configured from MUGLOAR_* env vars)
app = create_app()
