"""Metric recording helpers for assessments and filter runs."""

from __future__ import annotations

from chunk_gate.models.domain import ChunkAssessment
from chunk_gate.observability.logger import get_logger

logger = get_logger("metrics")


def log_assessment_metrics(chunk_id: str, assessment: ChunkAssessment) -> None:
    logger.debug(
        "chunk_assessed",
        chunk_id=chunk_id,
        initial=round(assessment.initial_score, 4),
        reflection=_round_optional(assessment.reflection_score),
        critic=_round_optional(assessment.critic_score),
        final=round(assessment.final_score, 4),
        confidence=round(assessment.confidence, 4),
        factors=len(assessment.factors),
    )


def log_filter_metrics(
    trace_id: str,
    total: int,
    passed: int,
    returned: int,
    batches: int,
) -> None:
    logger.info(
        "filter_completed",
        trace_id=trace_id,
        total=total,
        passed=passed,
        returned=returned,
        batches=batches,
    )


def log_latency(trace_id: str, stage: str, duration_ms: float) -> None:
    logger.info(
        "latency",
        trace_id=trace_id,
        stage=stage,
        duration_ms=round(duration_ms, 2),
    )


def _round_optional(value: float | None) -> float | None:
    return None if value is None else round(value, 4)
