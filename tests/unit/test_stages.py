"""Tests for the individual assessment stages."""

import pytest

from chunk_gate.assessment.stages import critic_validation, initial_assessment, self_reflection
from chunk_gate.models.domain import AssessmentFactor, Chunk, CriterionType, FilterCriterion
from chunk_gate.scoring.factor_names import FactorName
from chunk_gate.scoring.relevance_probe import RelevanceProbe


def _names(result):
    return [f.name for f in result.factors]


async def test_initial_assessment_without_query_skips_probe(fake_llm):
    chunk = Chunk("c", "Machine learning is a subset of AI.")
    result = await initial_assessment(chunk, None, (), RelevanceProbe(fake_llm))

    assert fake_llm.calls == 0
    assert _names(result) == [
        FactorName.CONTENT_RELEVANCE,
        FactorName.INFORMATION_DENSITY,
        FactorName.STRUCTURAL_IMPORTANCE,
    ]
    # mean of relevance 0.5, density 1.0, structure 0.5
    assert result.score == pytest.approx(2.0 / 3)


async def test_initial_assessment_with_query(make_llm):
    chunk = Chunk("c", "The weather is sunny.")
    result = await initial_assessment(chunk, "machine learning", (), RelevanceProbe(make_llm("0.1")))

    assert result.score == pytest.approx(0.4)
    llm_factor = result.factors[-1]
    assert llm_factor.name == FactorName.LLM_ASSESSMENT
    assert llm_factor.contribution == pytest.approx(0.08)
    assert "Primary factor: Information Density" in result.reasoning


async def test_initial_assessment_weights_criteria(fake_llm):
    chunk = Chunk("c", "Python is popular.")
    criteria = (FilterCriterion(CriterionType.KEYWORD_PRESENCE, value="python", weight=0.5),)
    result = await initial_assessment(chunk, None, criteria, RelevanceProbe(fake_llm))

    criterion_factor = result.factors[-1]
    assert criterion_factor.name == "KeywordPresence"
    assert criterion_factor.contribution == 0.5
    # relevance 0.5, density 1.0, structure 0.5, keyword 1.0 * 0.5
    assert result.score == pytest.approx(2.5 / 4)


async def test_initial_score_is_clamped_with_heavy_weights(fake_llm):
    chunk = Chunk("c", "Python is popular.")
    criteria = (FilterCriterion(CriterionType.KEYWORD_PRESENCE, value="python", weight=10.0),)
    result = await initial_assessment(chunk, None, criteria, RelevanceProbe(fake_llm))
    assert result.score == 1.0


def test_self_reflection_bias_correction():
    chunk = Chunk("c", "A complete sentence.")
    factors = (AssessmentFactor("A", 0.9), AssessmentFactor("B", 0.1))

    result = self_reflection(chunk, None, 0.5, factors)

    bias = next(f for f in result.factors if f.name == FactorName.BIAS_CORRECTION)
    # concentration 0.9 -> penalty (0.9 - 0.7) * 0.5
    assert bias.contribution == pytest.approx(-0.1)
    assert result.score == pytest.approx(0.4)


def test_self_reflection_completeness_adjustment():
    chunk = Chunk("c", "lowercase fragment without end")
    factors = (AssessmentFactor("A", 0.5), AssessmentFactor("B", 0.5))

    result = self_reflection(chunk, None, 0.5, factors)

    assert _names(result) == [FactorName.COMPLETENESS_ADJUSTMENT]
    assert result.factors[0].contribution == pytest.approx(-0.35)
    assert result.score == pytest.approx(0.15)
    assert "1 adjustments" in result.reasoning


def test_self_reflection_alternative_perspective():
    chunk = Chunk("c", "Machine learning explained.")
    factors = (AssessmentFactor("A", 0.5), AssessmentFactor("B", 0.5))

    result = self_reflection(chunk, "machine learning", 0.5, factors)

    alt = next(f for f in result.factors if f.name == FactorName.ALTERNATIVE_PERSPECTIVE)
    assert alt.contribution == pytest.approx((1.0 - 0.5) * 0.3)
    assert result.score == pytest.approx(0.65)


def test_self_reflection_without_triggers_keeps_score():
    chunk = Chunk("c", "A complete sentence.")
    factors = (AssessmentFactor("A", 0.5), AssessmentFactor("B", 0.5))
    result = self_reflection(chunk, None, 0.6, factors)
    assert result.factors == ()
    assert result.score == 0.6


def test_critic_validation_short_content():
    chunk = Chunk("c", "Short.")
    factors = (AssessmentFactor("A", 0.5), AssessmentFactor("B", 0.5))

    result = critic_validation(chunk, 0.6, factors)

    assert _names(result) == [FactorName.PATTERN_VALIDATION, FactorName.EDGE_CASE_DETECTION]
    assert result.factors[0].contribution == pytest.approx(-0.1)
    assert result.factors[1].contribution == pytest.approx(-0.3)
    assert result.score == pytest.approx(0.2)


def test_critic_validation_flags_inconsistent_factors():
    chunk = Chunk(
        "c",
        "Gradient descent updates model weights iteratively. "
        "Each step moves against the gradient of the loss function used for training.",
    )
    factors = (AssessmentFactor("A", 1.0), AssessmentFactor("B", -1.0))

    result = critic_validation(chunk, 0.5, factors)

    consistency = next(f for f in result.factors if f.name == FactorName.CONSISTENCY_ISSUE)
    assert consistency.contribution == pytest.approx(-0.3)
    assert FactorName.EDGE_CASE_DETECTION not in _names(result)
    # -0.3 consistency + 0.1 pattern
    assert result.score == pytest.approx(0.3)


def test_critic_validation_clamps_to_zero():
    chunk = Chunk("c", "1 2")
    result = critic_validation(chunk, 0.1, ())
    assert result.score == 0.0
