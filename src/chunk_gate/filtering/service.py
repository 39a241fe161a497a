"""Batch chunk filtering built on the three-stage assessor."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterable

from chunk_gate.assessment.assessor import ThreeStageAssessor
from chunk_gate.config.constants import PROBE_MAX_TOKENS, PROBE_PREVIEW_CHARS
from chunk_gate.exceptions import FilteringCancelled, PreconditionError
from chunk_gate.models.domain import Chunk, ChunkAssessment, FilteredChunk
from chunk_gate.models.metadata import parse_int
from chunk_gate.models.options import ChunkFilteringOptions
from chunk_gate.observability.logger import get_logger
from chunk_gate.observability.metrics import log_filter_metrics, log_latency
from chunk_gate.observability.tracing import TraceContext
from chunk_gate.protocols.llm import CompletionProvider
from chunk_gate.scoring import composer
from chunk_gate.scoring.relevance_probe import RelevanceProbe

logger = get_logger("chunk_filtering")

# Sort key for chunks without an index; they go last.
_MISSING_INDEX = sys.maxsize


def chunk_order_key(chunk: Chunk) -> int:
    index = parse_int(chunk.metadata, "index")
    return _MISSING_INDEX if index is None else index


class ChunkFilteringService:
    """Filters chunks by relevance and quality using a three-stage assessment.

    Language-model failures never surface to the caller; the probe falls back to
    heuristic relevance. Only cancellation and invalid arguments raise.
    """

    def __init__(
        self,
        llm: CompletionProvider,
        default_options: ChunkFilteringOptions | None = None,
        preview_chars: int = PROBE_PREVIEW_CHARS,
        probe_max_tokens: int = PROBE_MAX_TOKENS,
    ) -> None:
        if llm is None:
            raise PreconditionError("a completion provider is required")
        self._assessor = ThreeStageAssessor(
            RelevanceProbe(llm, preview_chars=preview_chars, max_tokens=probe_max_tokens)
        )
        self._default_options = default_options or ChunkFilteringOptions()

    async def assess(
        self,
        chunk: Chunk,
        query: str | None,
        options: ChunkFilteringOptions | None = None,
    ) -> ChunkAssessment:
        if chunk is None:
            raise PreconditionError("chunk is required")
        return await self._assessor.assess(chunk, query, options or self._default_options)

    async def filter(
        self,
        chunks: Iterable[Chunk],
        query: str | None,
        options: ChunkFilteringOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> list[FilteredChunk]:
        if chunks is None:
            raise PreconditionError("chunks are required")
        options = options or self._default_options
        if options.batch_size < 1:
            raise PreconditionError(f"batch_size must be >= 1, got {options.batch_size}")

        chunk_list = list(chunks)
        if not chunk_list:
            return []

        trace = TraceContext()
        results: list[FilteredChunk] = []
        batches = 0

        for start in range(0, len(chunk_list), options.batch_size):
            if cancel_event is not None and cancel_event.is_set():
                logger.info("filter_cancelled", trace_id=trace.trace_id, processed=len(results))
                raise FilteringCancelled(
                    f"filtering cancelled after {len(results)} of {len(chunk_list)} chunks"
                )

            batch = chunk_list[start : start + options.batch_size]
            with trace.span("batch", start=start, size=len(batch)):
                batch_results = await asyncio.gather(
                    *(self._assess_and_score(chunk, query, options) for chunk in batch)
                )
            results.extend(batch_results)
            batches += 1

        filtered = [fc for fc in results if fc.passed]
        if options.max_chunks is not None:
            filtered.sort(key=lambda fc: fc.combined_score, reverse=True)
            filtered = filtered[: options.max_chunks]
        if options.preserve_order:
            # Stable: chunks without an index keep their relative order.
            filtered.sort(key=lambda fc: chunk_order_key(fc.chunk))

        log_filter_metrics(
            trace.trace_id,
            total=len(chunk_list),
            passed=sum(1 for fc in results if fc.passed),
            returned=len(filtered),
            batches=batches,
        )
        log_latency(trace.trace_id, "filter", trace.elapsed_ms)
        logger.debug("filter_spans", trace_id=trace.trace_id, spans=trace.summary())
        return filtered

    async def _assess_and_score(
        self, chunk: Chunk, query: str | None, options: ChunkFilteringOptions
    ) -> FilteredChunk:
        assessment = await self._assessor.assess(chunk, query, options)

        quality = composer.quality_score(assessment)
        relevance = assessment.final_score
        combined = composer.combined_score(relevance, quality, options.quality_weight)
        passed = combined >= options.min_relevance_score

        return FilteredChunk(
            chunk=chunk,
            relevance_score=relevance,
            quality_score=quality,
            combined_score=combined,
            passed=passed,
            assessment=assessment,
            reason=composer.decision_reason(assessment, passed, options.min_relevance_score),
        )
