"""Chunk filtering, assessment and pre-screen endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from chunk_gate.api.dependencies import get_default_options, get_filtering_service
from chunk_gate.chunking.quality import EnrichmentRecommendation, analyze_chunk_quality
from chunk_gate.exceptions import ChunkGateError, PreconditionError
from chunk_gate.filtering.service import ChunkFilteringService
from chunk_gate.models.options import ChunkFilteringOptions
from chunk_gate.models.schemas import (
    AnalyzeRequest,
    AssessmentOut,
    AssessRequest,
    FilteredChunkOut,
    FilterRequest,
    FilterResponse,
    OptionsIn,
    QualityReportOut,
)

router = APIRouter(prefix="/chunks")


def _resolve_options(options: OptionsIn, defaults: ChunkFilteringOptions) -> ChunkFilteringOptions:
    try:
        return options.apply_to(defaults)
    except (PreconditionError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/filter", response_model=FilterResponse)
async def filter_chunks(
    request: FilterRequest,
    service: ChunkFilteringService = Depends(get_filtering_service),
    defaults: ChunkFilteringOptions = Depends(get_default_options),
) -> FilterResponse:
    options = _resolve_options(request.options, defaults)
    try:
        results = await service.filter(
            [c.to_domain() for c in request.chunks], request.query, options
        )
    except ChunkGateError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return FilterResponse(
        total=len(request.chunks),
        returned=len(results),
        chunks=[FilteredChunkOut.from_domain(fc) for fc in results],
    )


@router.post("/assess", response_model=AssessmentOut)
async def assess_chunk(
    request: AssessRequest,
    service: ChunkFilteringService = Depends(get_filtering_service),
    defaults: ChunkFilteringOptions = Depends(get_default_options),
) -> AssessmentOut:
    options = _resolve_options(request.options, defaults)
    try:
        assessment = await service.assess(request.chunk.to_domain(), request.query, options)
    except ChunkGateError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return AssessmentOut.from_domain(assessment)


@router.post("/analyze", response_model=QualityReportOut)
async def analyze_chunk(request: AnalyzeRequest) -> QualityReportOut:
    """Heuristic-only quality report; never calls the language model."""
    report = analyze_chunk_quality(request.chunk.content, request.chunk.metadata)
    return QualityReportOut(
        overall_score=report.overall_score,
        completeness_score=report.completeness_score,
        density_score=report.density_score,
        structure_score=report.structure_score,
        content_length=report.content_length,
        recommendations=[
            flag.name.lower()
            for flag in EnrichmentRecommendation
            if flag and flag in report.recommendation
        ],
    )
