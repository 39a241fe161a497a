"""Options controlling a filtering or assessment run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chunk_gate.config.settings import Settings
from chunk_gate.exceptions import PreconditionError
from chunk_gate.models.domain import FilterCriterion


class ChunkFilteringOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_relevance_score: float = Field(default=0.6, ge=0.0, le=1.0)
    max_chunks: int | None = Field(default=None, ge=1)
    preserve_order: bool = False
    quality_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    use_self_reflection: bool = True
    use_critic_validation: bool = True
    batch_size: int = 5
    criteria: tuple[FilterCriterion, ...] = ()

    @field_validator("batch_size")
    @classmethod
    def _check_batch_size(cls, value: int) -> int:
        # Raised outside pydantic's ValueError wrapping so callers see a precondition error.
        if value < 1:
            raise PreconditionError(f"batch_size must be >= 1, got {value}")
        return value

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> ChunkFilteringOptions:
        values = {
            "min_relevance_score": settings.filter_min_relevance_score,
            "max_chunks": settings.filter_max_chunks,
            "preserve_order": settings.filter_preserve_order,
            "quality_weight": settings.filter_quality_weight,
            "use_self_reflection": settings.filter_use_self_reflection,
            "use_critic_validation": settings.filter_use_critic_validation,
            "batch_size": settings.filter_batch_size,
        }
        values.update(overrides)
        return cls(**values)
