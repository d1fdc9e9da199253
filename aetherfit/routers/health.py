"""Router exposing basic system endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from aetherfit.config import Settings, get_settings


router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/status")
async def get_status(settings: Settings = Depends(get_settings)) -> dict[str, str]:
    """
    Report service status and whether the generation service is usable.

    ``generation_service`` is ``"demo"`` when no credential is configured, in
    which case every analysis is the fixed fallback.
    """
    return {
        "status": "online",
        "generation_service": "configured" if settings.generation_configured else "demo",
    }
