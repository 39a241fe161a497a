"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chunk_gate.models.domain import (
    AssessmentFactor,
    Chunk,
    ChunkAssessment,
    CriterionType,
    FilterCriterion,
    FilteredChunk,
)
from chunk_gate.models.options import ChunkFilteringOptions


class ChunkIn(BaseModel):
    id: str
    content: str
    metadata: dict[str, Any] | None = None

    def to_domain(self) -> Chunk:
        return Chunk(id=self.id, content=self.content, metadata=self.metadata)


class CriterionIn(BaseModel):
    type: CriterionType
    value: Any = None
    weight: float = 1.0

    def to_domain(self) -> FilterCriterion:
        return FilterCriterion(type=self.type, value=self.value, weight=self.weight)


class OptionsIn(BaseModel):
    min_relevance_score: float | None = None
    max_chunks: int | None = None
    preserve_order: bool | None = None
    quality_weight: float | None = None
    use_self_reflection: bool | None = None
    use_critic_validation: bool | None = None
    batch_size: int | None = None
    criteria: list[CriterionIn] | None = None

    def apply_to(self, defaults: ChunkFilteringOptions) -> ChunkFilteringOptions:
        """Layer the fields set on this request over the defaults.

        Omitted criteria keep the default criteria; an explicit empty list clears them.
        """
        merged = {name: getattr(defaults, name) for name in ChunkFilteringOptions.model_fields}
        merged.update(self.model_dump(exclude_none=True, exclude={"criteria"}))
        if self.criteria is not None:
            merged["criteria"] = tuple(c.to_domain() for c in self.criteria)
        return ChunkFilteringOptions(**merged)


class FilterRequest(BaseModel):
    chunks: list[ChunkIn]
    query: str | None = None
    options: OptionsIn = Field(default_factory=OptionsIn)


class AssessRequest(BaseModel):
    chunk: ChunkIn
    query: str | None = None
    options: OptionsIn = Field(default_factory=OptionsIn)


class AnalyzeRequest(BaseModel):
    chunk: ChunkIn


class FactorOut(BaseModel):
    name: str
    contribution: float
    explanation: str

    @classmethod
    def from_domain(cls, factor: AssessmentFactor) -> FactorOut:
        return cls(
            name=factor.name,
            contribution=factor.contribution,
            explanation=factor.explanation,
        )


class AssessmentOut(BaseModel):
    initial_score: float
    reflection_score: float | None
    critic_score: float | None
    final_score: float
    confidence: float
    factors: list[FactorOut]
    suggestions: list[str]
    reasoning: dict[str, str]

    @classmethod
    def from_domain(cls, assessment: ChunkAssessment) -> AssessmentOut:
        return cls(
            initial_score=assessment.initial_score,
            reflection_score=assessment.reflection_score,
            critic_score=assessment.critic_score,
            final_score=assessment.final_score,
            confidence=assessment.confidence,
            factors=[FactorOut.from_domain(f) for f in assessment.factors],
            suggestions=list(assessment.suggestions),
            reasoning=dict(assessment.reasoning),
        )


class FilteredChunkOut(BaseModel):
    id: str
    relevance_score: float
    quality_score: float
    combined_score: float
    passed: bool
    reason: str
    assessment: AssessmentOut

    @classmethod
    def from_domain(cls, filtered: FilteredChunk) -> FilteredChunkOut:
        return cls(
            id=filtered.chunk.id,
            relevance_score=filtered.relevance_score,
            quality_score=filtered.quality_score,
            combined_score=filtered.combined_score,
            passed=filtered.passed,
            reason=filtered.reason,
            assessment=AssessmentOut.from_domain(filtered.assessment),
        )


class FilterResponse(BaseModel):
    total: int
    returned: int
    chunks: list[FilteredChunkOut]


class QualityReportOut(BaseModel):
    overall_score: float
    completeness_score: float
    density_score: float
    structure_score: float
    content_length: int
    recommendations: list[str]


class HealthResponse(BaseModel):
    status: str
    model: str
