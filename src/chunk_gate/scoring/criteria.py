"""Dispatch of caller-supplied filter criteria to heuristic scorers."""

from __future__ import annotations

from collections.abc import Callable

from chunk_gate.config.constants import NEUTRAL_SCORE, TOPIC_RELEVANCE_BOOST
from chunk_gate.models.domain import Chunk, CriterionType, FilterCriterion
from chunk_gate.scoring import heuristics

_Scorer = Callable[[Chunk, str | None, FilterCriterion], float]

_SCORERS: dict[CriterionType, _Scorer] = {
    CriterionType.KEYWORD_PRESENCE: lambda c, q, cr: heuristics.keyword_presence(c.content, cr.value),
    CriterionType.TOPIC_RELEVANCE: lambda c, q, cr: (
        heuristics.content_relevance(c.content, q) * TOPIC_RELEVANCE_BOOST
    ),
    CriterionType.INFORMATION_DENSITY: lambda c, q, cr: heuristics.information_density(c.content),
    CriterionType.FACTUAL_CONTENT: lambda c, q, cr: heuristics.factual_content(c.content),
    CriterionType.RECENCY: lambda c, q, cr: heuristics.recency(c),
    CriterionType.SOURCE_CREDIBILITY: lambda c, q, cr: heuristics.source_credibility(c),
    CriterionType.COMPLETENESS: lambda c, q, cr: heuristics.completeness(c.content),
}


def evaluate_criterion(chunk: Chunk, query: str | None, criterion: FilterCriterion) -> float:
    """Return the raw (unweighted) score of one criterion for a chunk."""
    scorer = _SCORERS.get(criterion.type)
    if scorer is None:
        return NEUTRAL_SCORE
    return scorer(chunk, query, criterion)
