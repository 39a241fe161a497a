"""Three-stage chunk assessor: initial -> self-reflection -> critic validation."""

from __future__ import annotations

from chunk_gate.assessment.factors import merge_factors
from chunk_gate.assessment.stages import critic_validation, initial_assessment, self_reflection
from chunk_gate.models.domain import Chunk, ChunkAssessment
from chunk_gate.models.options import ChunkFilteringOptions
from chunk_gate.observability.metrics import log_assessment_metrics
from chunk_gate.scoring import composer
from chunk_gate.scoring.relevance_probe import RelevanceProbe


class ThreeStageAssessor:
    def __init__(self, probe: RelevanceProbe) -> None:
        self._probe = probe

    async def assess(
        self, chunk: Chunk, query: str | None, options: ChunkFilteringOptions
    ) -> ChunkAssessment:
        reasoning: dict[str, str] = {}

        initial = await initial_assessment(chunk, query, options.criteria, self._probe)
        factors = initial.factors
        reasoning["initial"] = initial.reasoning

        reflection_score: float | None = None
        if options.use_self_reflection:
            reflection = self_reflection(chunk, query, initial.score, initial.factors)
            reflection_score = reflection.score
            reasoning["reflection"] = reflection.reasoning
            factors = merge_factors(factors, reflection.factors)

        critic_score: float | None = None
        if options.use_critic_validation:
            previous = reflection_score if reflection_score is not None else initial.score
            critic = critic_validation(chunk, previous, factors)
            critic_score = critic.score
            reasoning["critic"] = critic.reasoning
            factors = merge_factors(factors, critic.factors)

        final = composer.final_score(initial.score, reflection_score, critic_score)
        assessment = ChunkAssessment(
            initial_score=initial.score,
            reflection_score=reflection_score,
            critic_score=critic_score,
            final_score=final,
            confidence=composer.confidence(
                initial.score, reflection_score, critic_score, factors
            ),
            factors=factors,
            suggestions=composer.suggestions(final, factors),
            reasoning=reasoning,
        )
        log_assessment_metrics(chunk.id, assessment)
        return assessment
