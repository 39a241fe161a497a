"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from chunk_gate.api.dependencies import get_settings
from chunk_gate.config.settings import Settings
from chunk_gate.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", model=settings.gemini_model)
