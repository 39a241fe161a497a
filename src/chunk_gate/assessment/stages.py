"""The three assessment stages: initial, self-reflection, critic validation."""

from __future__ import annotations

from chunk_gate.assessment.factors import dominant_factor
from chunk_gate.config.constants import (
    ALTERNATIVE_MIN_DIVERGENCE,
    ALTERNATIVE_SCALE,
    BIAS_CONCENTRATION_THRESHOLD,
    BIAS_PENALTY_SCALE,
    COMPLETENESS_PENALTY_SCALE,
    COMPLETENESS_THRESHOLD,
    CONSISTENCY_PENALTY_SCALE,
    CONSISTENCY_THRESHOLD,
    DENSITY_FACTOR_MULTIPLIER,
    LLM_FACTOR_MULTIPLIER,
    NEUTRAL_SCORE,
    PATTERN_SCALE,
    STRUCTURE_FACTOR_MULTIPLIER,
)
from chunk_gate.models.domain import AssessmentFactor, Chunk, FilterCriterion, StageResult
from chunk_gate.scoring import heuristics
from chunk_gate.scoring.criteria import evaluate_criterion
from chunk_gate.scoring.factor_names import FactorName
from chunk_gate.scoring.relevance_probe import RelevanceProbe


async def initial_assessment(
    chunk: Chunk,
    query: str | None,
    criteria: tuple[FilterCriterion, ...],
    probe: RelevanceProbe,
) -> StageResult:
    """Stage 1: heuristic signals, weighted criteria and, with a query, one model probe."""
    factors: list[AssessmentFactor] = []
    scores: list[float] = []
    content = chunk.content

    relevance = heuristics.content_relevance(content, query)
    factors.append(
        AssessmentFactor(
            FactorName.CONTENT_RELEVANCE,
            relevance,
            f"Content alignment with query: {relevance:.2f}",
        )
    )
    scores.append(relevance)

    density = heuristics.information_density(content)
    factors.append(
        AssessmentFactor(
            FactorName.INFORMATION_DENSITY,
            density * DENSITY_FACTOR_MULTIPLIER,
            f"Information richness: {density:.2f}",
        )
    )
    scores.append(density)

    structure = heuristics.structural_importance(chunk)
    factors.append(
        AssessmentFactor(
            FactorName.STRUCTURAL_IMPORTANCE,
            structure * STRUCTURE_FACTOR_MULTIPLIER,
            f"Document structure relevance: {structure:.2f}",
        )
    )
    scores.append(structure)

    for criterion in criteria:
        criterion_score = evaluate_criterion(chunk, query, criterion)
        weighted = criterion_score * criterion.weight
        factors.append(
            AssessmentFactor(
                criterion.type.value,
                weighted,
                f"Criterion {criterion.type.value}: {criterion_score:.2f}",
            )
        )
        scores.append(weighted)

    if query:
        result = await probe.probe(chunk, query)
        label = "heuristic fallback" if result.used_fallback else "LLM relevance assessment"
        factors.append(
            AssessmentFactor(
                FactorName.LLM_ASSESSMENT,
                result.score * LLM_FACTOR_MULTIPLIER,
                f"{label}: {result.score:.2f}",
            )
        )
        scores.append(result.score)

    score = heuristics.clamp(sum(scores) / len(scores)) if scores else NEUTRAL_SCORE
    top = dominant_factor(factors)
    reasoning = f"Initial assessment based on {len(factors)} factors."
    if top is not None:
        reasoning += f" Primary factor: {top.name}"
    return StageResult(score=score, reasoning=reasoning, factors=tuple(factors))


def self_reflection(
    chunk: Chunk,
    query: str | None,
    initial_score: float,
    initial_factors: tuple[AssessmentFactor, ...],
) -> StageResult:
    """Stage 2: correct for a dominating factor, incompleteness and a diverging view."""
    factors: list[AssessmentFactor] = []

    concentration = heuristics.factor_concentration(initial_factors)
    if concentration > BIAS_CONCENTRATION_THRESHOLD:
        penalty = (concentration - BIAS_CONCENTRATION_THRESHOLD) * BIAS_PENALTY_SCALE
        factors.append(
            AssessmentFactor(
                FactorName.BIAS_CORRECTION,
                -penalty,
                f"Correcting for assessment bias: {penalty:.2f}",
            )
        )

    completeness = heuristics.completeness(chunk.content)
    if completeness < COMPLETENESS_THRESHOLD:
        factors.append(
            AssessmentFactor(
                FactorName.COMPLETENESS_ADJUSTMENT,
                (completeness - COMPLETENESS_THRESHOLD) * COMPLETENESS_PENALTY_SCALE,
                f"Adjusting for incomplete coverage: {completeness:.2f}",
            )
        )

    alternative = heuristics.alternative_perspective(chunk.content, query)
    if abs(alternative - initial_score) > ALTERNATIVE_MIN_DIVERGENCE:
        factors.append(
            AssessmentFactor(
                FactorName.ALTERNATIVE_PERSPECTIVE,
                (alternative - initial_score) * ALTERNATIVE_SCALE,
                f"Alternative view suggests: {alternative:.2f}",
            )
        )

    score = heuristics.clamp(initial_score + sum(f.contribution for f in factors))
    reasoning = (
        f"Self-reflection identified {len(factors)} adjustments. "
        f"Score adjusted from {initial_score:.2f} to {score:.2f}"
    )
    return StageResult(score=score, reasoning=reasoning, factors=tuple(factors))


def critic_validation(
    chunk: Chunk,
    previous_score: float,
    prior_factors: tuple[AssessmentFactor, ...],
) -> StageResult:
    """Stage 3: check factor consistency, textual patterns and edge cases."""
    factors: list[AssessmentFactor] = []

    consistency = heuristics.factor_consistency(prior_factors)
    if consistency < CONSISTENCY_THRESHOLD:
        factors.append(
            AssessmentFactor(
                FactorName.CONSISTENCY_ISSUE,
                (consistency - 1) * CONSISTENCY_PENALTY_SCALE,
                f"Inconsistency detected: {consistency:.2f}",
            )
        )

    validation = heuristics.pattern_validation(chunk.content)
    factors.append(
        AssessmentFactor(
            FactorName.PATTERN_VALIDATION,
            (validation - NEUTRAL_SCORE) * PATTERN_SCALE,
            f"Pattern matching validation: {validation:.2f}",
        )
    )

    edge = heuristics.edge_case_adjustment(chunk.content)
    if edge != 0:
        factors.append(
            AssessmentFactor(
                FactorName.EDGE_CASE_DETECTION,
                edge,
                f"Edge case adjustment: {edge:.2f}",
            )
        )

    score = heuristics.clamp(previous_score + sum(f.contribution for f in factors))
    reasoning = f"Critic validation performed {len(factors)} checks. Final validation score: {score:.2f}"
    return StageResult(score=score, reasoning=reasoning, factors=tuple(factors))
