"""Health check and settings endpoints."""

from fastapi import APIRouter, Depends

from mugloar.config import Settings

from .deps import get_settings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def read_settings(settings: Settings = Depends(get_settings)):
    """Effective bot settings (API URL, turn budget, delay, session TTL)."""
    return settings.model_dump(exclude={"host", "port"})
