import pytest

from quantdesk.deals.scoring import DEFAULT_WEIGHTS, rate, score_deal
from quantdesk.models.deals import DealDimensionScores, DealScoringRequest

_FIELDS = list(DealDimensionScores.model_fields)


def _make_scores(default: float = 7.0, **overrides) -> DealDimensionScores:
    values = {name: default for name in _FIELDS}
    values.update(overrides)
    return DealDimensionScores(**values)


def _make_request(scores: DealDimensionScores, weights: DealDimensionScores | None = None) -> DealScoringRequest:
    return DealScoringRequest(company_name="Acme Corp", scores=scores, weights=weights)


def test_default_weights_sum_to_one():
    assert sum(DEFAULT_WEIGHTS.model_dump().values()) == pytest.approx(1.0)


def test_uniform_scores():
    result = score_deal(_make_request(_make_scores(7.0)))
    assert result.overall_score == pytest.approx(7.0)
    assert result.rating == "Attractive"
    assert result.company_name == "Acme Corp"
    assert len(result.dimensions) == 8
    assert len(result.radar_chart_data) == 8


def test_extremes():
    assert score_deal(_make_request(_make_scores(10.0))).rating == "Highly Attractive"
    assert score_deal(_make_request(_make_scores(1.0))).rating == "Pass"


def test_scores_are_clamped():
    result = score_deal(_make_request(_make_scores(7.0, market_position=15.0, esg_compliance=-3.0)))
    by_name = {d.name: d for d in result.dimensions}
    assert by_name["Market Position"].score == 10.0
    assert by_name["ESG Compliance"].score == 1.0


def test_custom_weights_are_normalized():
    result = score_deal(_make_request(_make_scores(6.0, growth_potential=10.0), _make_scores(1.0)))
    assert all(d.weight == pytest.approx(1 / 8) for d in result.dimensions)
    assert result.overall_score == pytest.approx((7 * 6.0 + 10.0) / 8)


def test_overall_is_sum_of_weighted_scores():
    result = score_deal(_make_request(_make_scores(5.0, financial_health=9.0, regulatory_risk=2.0)))
    assert result.overall_score == pytest.approx(sum(d.weighted_score for d in result.dimensions))


@pytest.mark.parametrize("score,expected", [
    (8.0, "Highly Attractive"),
    (7.99, "Attractive"),
    (6.5, "Attractive"),
    (6.49, "Neutral"),
    (5.0, "Neutral"),
    (3.5, "Cautious"),
    (3.49, "Pass"),
])
def test_rating_bands(score, expected):
    assert rate(score) == expected


def test_recommendation_names_strengths_and_concerns():
    result = score_deal(_make_request(_make_scores(6.0, synergy_potential=9.0, regulatory_risk=3.0)))
    assert "Key strengths: Synergy Potential" in result.recommendation
    assert "Areas of concern: Regulatory Risk" in result.recommendation


def test_assessment_text():
    result = score_deal(_make_request(_make_scores(6.0, growth_potential=9.0, esg_compliance=2.0)))
    by_name = {d.name: d for d in result.dimensions}
    assert by_name["Growth Potential"].assessment.startswith("Strong")
    assert by_name["ESG Compliance"].assessment.startswith("Weak")
    assert by_name["Valuation"].assessment.startswith("Adequate")
