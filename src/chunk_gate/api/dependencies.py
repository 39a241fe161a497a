"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from chunk_gate.config.settings import Settings
from chunk_gate.filtering.service import ChunkFilteringService
from chunk_gate.models.options import ChunkFilteringOptions


def get_filtering_service(request: Request) -> ChunkFilteringService:
    return request.app.state.filtering_service


def get_default_options(request: Request) -> ChunkFilteringOptions:
    return request.app.state.default_options


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
