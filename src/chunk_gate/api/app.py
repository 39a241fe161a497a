"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from chunk_gate.api.middleware import RequestTimingMiddleware
from chunk_gate.api.routes_chunks import router as chunks_router
from chunk_gate.api.routes_health import router as health_router
from chunk_gate.config.settings import Settings
from chunk_gate.filtering.service import ChunkFilteringService
from chunk_gate.generation.gemini_provider import GeminiProvider
from chunk_gate.models.options import ChunkFilteringOptions
from chunk_gate.observability.logger import get_logger, setup_logging
from chunk_gate.protocols.llm import CompletionProvider

logger = get_logger("app")


def create_app(
    settings: Settings | None = None,
    llm: CompletionProvider | None = None,
) -> FastAPI:
    """Build the app. ``llm`` overrides the Gemini provider built from settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or Settings()
        setup_logging(resolved.log_level, resolved.log_json)

        provider = llm or GeminiProvider.from_settings(resolved)
        default_options = ChunkFilteringOptions.from_settings(resolved)

        app.state.settings = resolved
        app.state.default_options = default_options
        app.state.filtering_service = ChunkFilteringService(
            provider,
            default_options=default_options,
            preview_chars=resolved.probe_preview_chars,
            probe_max_tokens=resolved.gemini_max_tokens,
        )

        logger.info(
            "startup_complete",
            model=resolved.gemini_model,
            min_relevance_score=default_options.min_relevance_score,
            batch_size=default_options.batch_size,
        )
        yield
        logger.info("shutdown_complete")

    app = FastAPI(
        title="Chunk Gate",
        version="1.0.0",
        description="Three-stage relevance and quality gate for RAG chunks",
        lifespan=lifespan,
    )
    app.add_middleware(RequestTimingMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(chunks_router, tags=["chunks"])
    return app
