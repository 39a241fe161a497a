"""Single-call language-model relevance probe with heuristic fallback."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from chunk_gate.config.constants import PROBE_MAX_TOKENS, PROBE_PREVIEW_CHARS
from chunk_gate.exceptions import PreconditionError
from chunk_gate.generation.prompt_templates import (
    RELEVANCE_RATING_PROMPT,
    RELEVANCE_RATING_SYSTEM,
    format_content_preview,
)
from chunk_gate.models.domain import Chunk
from chunk_gate.observability.logger import get_logger
from chunk_gate.protocols.llm import CompletionOptions, CompletionProvider
from chunk_gate.scoring.heuristics import clamp, content_relevance

logger = get_logger("relevance_probe")


class ProbeSource(str, Enum):
    MODEL = "model"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ProbeResult:
    score: float
    source: ProbeSource
    error: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.source is ProbeSource.FALLBACK


def parse_score(raw: str) -> float | None:
    """Parse a bare numeric rating. Returns None when the text is not a finite number."""
    try:
        value = float(raw.strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return clamp(value)


class RelevanceProbe:
    def __init__(
        self,
        llm: CompletionProvider,
        preview_chars: int = PROBE_PREVIEW_CHARS,
        max_tokens: int = PROBE_MAX_TOKENS,
    ) -> None:
        if llm is None:
            raise PreconditionError("a completion provider is required")
        self._llm = llm
        self._preview_chars = preview_chars
        self._options = CompletionOptions(
            system_prompt=RELEVANCE_RATING_SYSTEM,
            temperature=0.0,
            max_tokens=max_tokens,
        )

    async def probe(self, chunk: Chunk, query: str) -> ProbeResult:
        prompt = RELEVANCE_RATING_PROMPT.format(
            query=query,
            content_preview=format_content_preview(chunk.content, self._preview_chars),
        )

        try:
            raw = await self._llm.complete(prompt, self._options)
        except Exception as e:
            return self._fallback(chunk, query, f"{type(e).__name__}: {e}")

        score = parse_score(raw) if isinstance(raw, str) else None
        if score is None:
            return self._fallback(chunk, query, f"unparseable response: {raw!r:.60}")
        return ProbeResult(score=score, source=ProbeSource.MODEL)

    @staticmethod
    def _fallback(chunk: Chunk, query: str, error: str) -> ProbeResult:
        score = content_relevance(chunk.content, query)
        logger.warning(
            "probe_fallback",
            chunk_id=chunk.id,
            error=error,
            fallback_score=round(score, 4),
        )
        return ProbeResult(score=score, source=ProbeSource.FALLBACK, error=error)
