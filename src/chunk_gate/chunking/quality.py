"""LLM-free chunk quality pre-screen: heuristic scores and enrichment recommendations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Flag, auto
from typing import Any

from chunk_gate.config.constants import (
    MIN_KEYWORD_DENSITY,
    MIN_SUMMARIZATION_LENGTH,
)
from chunk_gate.models.metadata import get_int, get_str

_START_MARKERS = ("#", "-")
_END_MARKERS = (".", "!", "?", ":", ";")
_LIST_MARKERS = ("\n- ", "\n* ", "\n1.")


class EnrichmentRecommendation(Flag):
    NONE = 0
    SUMMARIZE = auto()
    EXTRACT_KEYWORDS = auto()
    ADD_CONTEXT = auto()
    USE_TABLE_PROMPT = auto()


@dataclass(frozen=True)
class ChunkQualityReport:
    overall_score: float
    completeness_score: float
    density_score: float
    structure_score: float
    content_length: int
    recommendation: EnrichmentRecommendation


def analyze_chunk_quality(
    content: str, metadata: Mapping[str, Any] | None = None
) -> ChunkQualityReport:
    if not content or not content.strip():
        return ChunkQualityReport(0.0, 0.0, 0.0, 0.0, 0, EnrichmentRecommendation.NONE)

    completeness = _completeness(content)
    density = _density(content)
    structure = _structure(content)
    report = ChunkQualityReport(
        overall_score=completeness * 0.3 + density * 0.4 + structure * 0.3,
        completeness_score=completeness,
        density_score=density,
        structure_score=structure,
        content_length=len(content),
        recommendation=_recommend(content, completeness, density),
    )

    content_type = get_str(metadata, "content_type")
    if content_type is not None and content_type.lower() == "table":
        report = replace(
            report,
            structure_score=max(report.structure_score, 0.8),
            recommendation=report.recommendation | EnrichmentRecommendation.USE_TABLE_PROMPT,
        )

    index = get_int(metadata, "chunk_index")
    if index is not None and index < 3:
        report = replace(report, structure_score=min(1.0, report.structure_score + 0.1))

    return report


def _completeness(content: str) -> float:
    trimmed = content.strip()
    score = 0.0
    if trimmed[0].isupper() or trimmed.startswith(_START_MARKERS):
        score += 0.5
    if trimmed.endswith(_END_MARKERS):
        score += 0.5
    return score


def _density(content: str) -> float:
    words = content.split()
    if not words:
        return 0.0
    density = len({w.lower() for w in words}) / len(words)
    if any(any(c.isdigit() for c in w) for w in words):
        density += 0.1
    if any("_" in w or "-" in w or "." in w for w in words):
        density += 0.1
    return min(1.0, density)


def _structure(content: str) -> float:
    score = 0.5
    if content.startswith("#") or "\n#" in content:
        score += 0.15
    if "```" in content:
        score += 0.15
    if "|" in content and "\n" in content:
        score += 0.1
    if any(marker in content for marker in _LIST_MARKERS):
        score += 0.1
    return min(1.0, score)


def _recommend(content: str, completeness: float, density: float) -> EnrichmentRecommendation:
    recommendation = EnrichmentRecommendation.NONE
    if len(content) >= MIN_SUMMARIZATION_LENGTH:
        recommendation |= EnrichmentRecommendation.SUMMARIZE
    if density >= MIN_KEYWORD_DENSITY:
        recommendation |= EnrichmentRecommendation.EXTRACT_KEYWORDS
    if completeness < 0.5:
        recommendation |= EnrichmentRecommendation.ADD_CONTEXT
    return recommendation
