"""Deterministic heuristic scorers. Pure functions, no I/O."""

from __future__ import annotations

import re
from datetime import datetime, timezone

import numpy as np

from chunk_gate.config.constants import (
    ALTERNATIVE_FLOOR,
    ALTERNATIVE_LOW_RELEVANCE,
    MAX_NEWLINE_RATIO,
    MIN_CONTENT_LENGTH,
    MIN_UNIQUE_WORD_RATIO,
    NEUTRAL_SCORE,
    NUMERIC_WORD_RATIO,
    PATTERN_MAX_LENGTH,
    PATTERN_MIN_LENGTH,
    REPETITION_MIN_WORDS,
)
from chunk_gate.models.domain import AssessmentFactor, Chunk
from chunk_gate.models.metadata import get_datetime, get_int, get_str

_DIGIT_RE = re.compile(r"\d")
_NUMERIC_WORD_RE = re.compile(r"^[\d.,]+$")
_TECHNICAL_MARKERS = ("_", "-", ".")
_TERMINATORS = (".", "!", "?")

# Credibility by source file type
_SOURCE_CREDIBILITY = {
    "PDF": 0.8,
    "DOCX": 0.7,
    "WEB": 0.5,
    "TXT": 0.4,
    "TEXT": 0.4,
}

# (max age in days, score), checked in order
_RECENCY_BANDS = ((7, 1.0), (30, 0.8), (90, 0.6))
_STALE_SCORE = 0.4


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def split_words(content: str) -> list[str]:
    return [w for w in content.split(" ") if w]


def unique_ratio(words: list[str]) -> float:
    if not words:
        return 0.0
    return len({w.lower() for w in words}) / len(words)


def content_relevance(content: str, query: str | None) -> float:
    """Fraction of query terms that appear in the content."""
    if not query:
        return NEUTRAL_SCORE
    terms = [t for t in query.lower().split(" ") if t]
    if not terms:
        return NEUTRAL_SCORE
    content_lower = content.lower()
    matches = sum(1 for term in terms if term in content_lower)
    return matches / len(terms)


def information_density(content: str) -> float:
    words = split_words(content)
    if not words:
        return 0.0
    density = unique_ratio(words)
    if any(_DIGIT_RE.search(w) for w in words):
        density += 0.1
    if any(marker in w for w in words for marker in _TECHNICAL_MARKERS):
        density += 0.1
    return min(1.0, density)


def structural_importance(chunk: Chunk) -> float:
    content = chunk.content
    lowered = content.lower()
    score = 0.5
    if content.startswith("#") or "heading" in lowered:
        score += 0.2
    if "```" in content or "code" in lowered:
        score += 0.15
    if "table" in lowered or "|" in content:
        score += 0.15
    index = get_int(chunk.metadata, "index")
    if index is not None and index < 3:
        score += 0.1
    return min(1.0, score)


def completeness(content: str) -> float:
    """Half credit for a capitalized start, half for a terminal punctuation mark."""
    trimmed = content.strip()
    if not trimmed:
        return 0.0
    score = 0.0
    if trimmed[0].isupper():
        score += 0.5
    if trimmed.endswith(_TERMINATORS):
        score += 0.5
    return score


def factual_content(content: str) -> float:
    score = 0.5
    if _DIGIT_RE.search(content):
        score += 0.2
    if "[" in content and "]" in content:
        score += 0.15
    capitalized = sum(1 for w in content.split(" ") if len(w) > 2 and w[0].isupper())
    if capitalized > 2:
        score += 0.15
    return min(1.0, score)


def keyword_presence(content: str, value: object) -> float:
    content_lower = content.lower()
    if isinstance(value, str):
        return 1.0 if value.lower() in content_lower else 0.0
    if isinstance(value, (list, tuple, set, frozenset)) and all(
        isinstance(k, str) for k in value
    ):
        keywords = list(value)
        if not keywords:
            return NEUTRAL_SCORE
        matches = sum(1 for k in keywords if k.lower() in content_lower)
        return matches / len(keywords)
    return NEUTRAL_SCORE


def recency(chunk: Chunk, now: datetime | None = None) -> float:
    processed_at = get_datetime(chunk.metadata, "processed_at")
    if processed_at is None:
        return NEUTRAL_SCORE
    now = now or datetime.now(timezone.utc)
    age_days = (now - processed_at).total_seconds() / 86400
    for max_days, score in _RECENCY_BANDS:
        if age_days < max_days:
            return score
    return _STALE_SCORE


def source_credibility(chunk: Chunk) -> float:
    file_type = get_str(chunk.metadata, "file_type")
    if file_type is None:
        return NEUTRAL_SCORE
    return _SOURCE_CREDIBILITY.get(file_type.upper(), NEUTRAL_SCORE)


def alternative_perspective(content: str, query: str | None) -> float:
    """Re-derive relevance from the content alone, flooring very low values."""
    if not query:
        return NEUTRAL_SCORE
    direct = content_relevance(content, query)
    if direct < ALTERNATIVE_LOW_RELEVANCE:
        return ALTERNATIVE_FLOOR
    return direct


def factor_concentration(factors: tuple[AssessmentFactor, ...] | list[AssessmentFactor]) -> float:
    """Share of the total absolute contribution held by the single largest factor."""
    magnitudes = [abs(f.contribution) for f in factors]
    total = sum(magnitudes)
    if not magnitudes or total == 0:
        return 0.0
    return max(magnitudes) / total


def factor_consistency(factors: tuple[AssessmentFactor, ...] | list[AssessmentFactor]) -> float:
    contributions = [f.contribution for f in factors]
    if len(contributions) < 2:
        return 1.0
    return max(0.0, 1.0 - 2.0 * float(np.var(contributions)))


def pattern_validation(content: str) -> float:
    score = 0.5
    length = len(content)
    if PATTERN_MIN_LENGTH < length < PATTERN_MAX_LENGTH:
        score += 0.1
    if ". " in content or ".\n" in content:
        score += 0.1
    if length < MIN_CONTENT_LENGTH:
        score -= 0.2
    if length and content.count("\n") / length > MAX_NEWLINE_RATIO:
        score -= 0.1
    return clamp(score)


def edge_case_adjustment(content: str) -> float:
    adjustment = 0.0
    if len(content) < MIN_CONTENT_LENGTH:
        adjustment -= 0.3
    words = split_words(content)
    if words:
        numeric = sum(1 for w in words if _NUMERIC_WORD_RE.match(w))
        if numeric / len(words) > NUMERIC_WORD_RATIO:
            adjustment -= 0.2
        if len(words) > REPETITION_MIN_WORDS and unique_ratio(words) < MIN_UNIQUE_WORD_RATIO:
            adjustment -= 0.2
    return adjustment
