"""Score composition: final score, confidence, quality and the pass/fail reason.

FINAL = weighted mean of the stage scores that ran (0.4 / 0.3 / 0.3, renormalized)
CONF  = 0.5*stage_consistency + 0.3*factor_diversity + 0.2*extremity
"""

from __future__ import annotations

import numpy as np

from chunk_gate.assessment.factors import dominant_factor, weakest_factor
from chunk_gate.config.constants import (
    CONF_CONSISTENCY_WEIGHT,
    CONF_DIVERSITY_WEIGHT,
    CONF_EXTREMITY_WEIGHT,
    CONF_FULL_DIVERSITY_FACTORS,
    CRITIC_STAGE_WEIGHT,
    EDGE_CASE_CONTRIBUTION,
    INITIAL_STAGE_WEIGHT,
    LOW_CONFIDENCE_THRESHOLD,
    LOW_DENSITY_CONTRIBUTION,
    LOW_FINAL_SCORE,
    NEUTRAL_SCORE,
    REFLECTION_STAGE_WEIGHT,
)
from chunk_gate.models.domain import AssessmentFactor, ChunkAssessment
from chunk_gate.scoring.factor_names import FactorName
from chunk_gate.scoring.heuristics import clamp

SUGGEST_REFINE_BOUNDARIES = "Consider refining chunk boundaries to capture more complete context"
SUGGEST_MERGE_LOW_DENSITY = "Low information density - consider merging with adjacent chunks"
SUGGEST_REVIEW_EXTRACTION = "Edge case detected - review chunk extraction logic"


def _present_stages(
    initial: float, reflection: float | None, critic: float | None
) -> list[tuple[float, float]]:
    stages = [(initial, INITIAL_STAGE_WEIGHT)]
    if reflection is not None:
        stages.append((reflection, REFLECTION_STAGE_WEIGHT))
    if critic is not None:
        stages.append((critic, CRITIC_STAGE_WEIGHT))
    return stages


def final_score(initial: float, reflection: float | None, critic: float | None) -> float:
    stages = _present_stages(initial, reflection, critic)
    total_weight = sum(w for _, w in stages)
    return clamp(sum(s * w for s, w in stages) / total_weight)


def confidence(
    initial: float,
    reflection: float | None,
    critic: float | None,
    factors: tuple[AssessmentFactor, ...],
) -> float:
    scores = [s for s, _ in _present_stages(initial, reflection, critic)]
    mean = float(np.mean(scores))
    consistency = max(0.0, 1.0 - 2.0 * float(np.var(scores)))
    diversity = min(1.0, len(factors) / CONF_FULL_DIVERSITY_FACTORS)
    extremity = abs(mean - 0.5) * 2
    conf = (
        CONF_CONSISTENCY_WEIGHT * consistency
        + CONF_DIVERSITY_WEIGHT * diversity
        + CONF_EXTREMITY_WEIGHT * extremity
    )
    return clamp(conf)


def quality_score(assessment: ChunkAssessment) -> float:
    quality = NEUTRAL_SCORE
    density = assessment.factor(FactorName.INFORMATION_DENSITY)
    if density is not None:
        quality = max(quality, density.contribution + 0.5)
    completeness = assessment.factor(FactorName.COMPLETENESS_ADJUSTMENT)
    if completeness is not None:
        quality += completeness.contribution * 0.5
    return clamp(quality)


def combined_score(relevance: float, quality: float, quality_weight: float) -> float:
    return clamp(relevance * (1 - quality_weight) + quality * quality_weight)


def suggestions(score: float, factors: tuple[AssessmentFactor, ...]) -> tuple[str, ...]:
    result: list[str] = []
    if score < LOW_FINAL_SCORE:
        result.append(SUGGEST_REFINE_BOUNDARIES)

    by_name = {}
    for factor in factors:
        by_name.setdefault(factor.name, factor)

    density = by_name.get(FactorName.INFORMATION_DENSITY)
    if density is not None and density.contribution < LOW_DENSITY_CONTRIBUTION:
        result.append(SUGGEST_MERGE_LOW_DENSITY)

    edge = by_name.get(FactorName.EDGE_CASE_DETECTION)
    if edge is not None and edge.contribution < EDGE_CASE_CONTRIBUTION:
        result.append(SUGGEST_REVIEW_EXTRACTION)
    return tuple(result)


def decision_reason(assessment: ChunkAssessment, passed: bool, min_relevance_score: float) -> str:
    reasons: list[str] = []
    if passed:
        reasons.append(f"Relevance: {assessment.final_score:.2f}")
        top = dominant_factor(assessment.factors)
        if top is not None:
            reasons.append(f"Key factor: {top.name}")
    else:
        reasons.append(f"Below threshold ({min_relevance_score:.2f})")
        worst = weakest_factor(assessment.factors)
        if worst is not None:
            reasons.append(f"Issue: {worst.name}")

    if assessment.confidence < LOW_CONFIDENCE_THRESHOLD:
        reasons.append("Low confidence assessment")
    return ", ".join(reasons)
