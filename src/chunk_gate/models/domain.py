"""Core domain objects used throughout the system."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Chunk:
    id: str
    content: str
    metadata: Mapping[str, Any] | None = None


class CriterionType(str, Enum):
    KEYWORD_PRESENCE = "KeywordPresence"
    TOPIC_RELEVANCE = "TopicRelevance"
    INFORMATION_DENSITY = "InformationDensity"
    FACTUAL_CONTENT = "FactualContent"
    RECENCY = "Recency"
    SOURCE_CREDIBILITY = "SourceCredibility"
    COMPLETENESS = "Completeness"


@dataclass(frozen=True)
class FilterCriterion:
    type: CriterionType
    value: Any = None  # keyword or list of keywords for KeywordPresence
    weight: float = 1.0


@dataclass(frozen=True)
class AssessmentFactor:
    name: str
    contribution: float  # signed, negative values are penalties
    explanation: str = ""


@dataclass(frozen=True)
class StageResult:
    score: float
    reasoning: str
    factors: tuple[AssessmentFactor, ...]


@dataclass(frozen=True)
class ChunkAssessment:
    initial_score: float
    final_score: float
    confidence: float
    reflection_score: float | None = None
    critic_score: float | None = None
    factors: tuple[AssessmentFactor, ...] = ()
    suggestions: tuple[str, ...] = ()
    reasoning: Mapping[str, str] = field(default_factory=dict)

    def factor(self, name: str) -> AssessmentFactor | None:
        return next((f for f in self.factors if f.name == name), None)


@dataclass(frozen=True)
class FilteredChunk:
    chunk: Chunk
    relevance_score: float
    quality_score: float
    combined_score: float
    passed: bool
    assessment: ChunkAssessment
    reason: str = ""
