"""Request dependencies shared by the route modules."""

from fastapi import Depends, HTTPException, Request

from backend.registry import SessionRegistry
from mugloar.config import Settings
from mugloar.session import GameSession


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.registry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(game_id: str, registry: SessionRegistry = Depends(get_registry)) -> GameSession:
    session = registry.get(game_id)
    if session is None:
        raise HTTPException(404, "Game not found")
    return session
