"""Ordered merge of assessment factors across stages."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from chunk_gate.models.domain import AssessmentFactor


def merge_factors(
    existing: Iterable[AssessmentFactor], incoming: Iterable[AssessmentFactor]
) -> tuple[AssessmentFactor, ...]:
    """Merge a stage's factors into the accumulated list, keeping order.

    An incoming factor whose name already exists is folded into the first
    factor of that name: contributions are averaged and explanations joined
    with " | ". New names are appended. Duplicates already present in
    ``existing`` (e.g. two criteria of the same type) are left as they are.
    """
    merged = list(existing)
    positions: dict[str, int] = {}
    for i, factor in enumerate(merged):
        positions.setdefault(factor.name, i)

    for factor in incoming:
        i = positions.get(factor.name)
        if i is None:
            positions[factor.name] = len(merged)
            merged.append(factor)
            continue
        current = merged[i]
        merged[i] = replace(
            current,
            contribution=(current.contribution + factor.contribution) / 2,
            explanation=f"{current.explanation} | {factor.explanation}",
        )
    return tuple(merged)


def dominant_factor(factors: Iterable[AssessmentFactor]) -> AssessmentFactor | None:
    """Factor with the largest absolute contribution (first wins on ties)."""
    return max(factors, key=lambda f: abs(f.contribution), default=None)


def weakest_factor(factors: Iterable[AssessmentFactor]) -> AssessmentFactor | None:
    return min(factors, key=lambda f: f.contribution, default=None)
