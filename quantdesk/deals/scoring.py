"""Weighted deal scoring matrix.

Each of eight dimensions is scored 1-10 and weighted; the overall score is
sum(w_i * s_i). Rating bands:

    8.0 - 10.0  Highly Attractive
    6.5 - 7.9   Attractive
    5.0 - 6.4   Neutral
    3.5 - 4.9   Cautious
    1.0 - 3.4   Pass
"""
import logging

from quantdesk.models.deals import (
    DealDimensionScores, DealScoringRequest, DealScoringResult,
    DealDimension, RadarPoint, Rating,
)

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS = DealDimensionScores(
    market_position=0.15,
    financial_health=0.15,
    management_quality=0.10,
    growth_potential=0.15,
    regulatory_risk=0.10,
    esg_compliance=0.10,
    synergy_potential=0.10,
    valuation_attractiveness=0.15,
)

# (field, display name, chart colour)
_DIMENSIONS: list[tuple[str, str, str]] = [
    ("market_position", "Market Position", "#6366f1"),
    ("financial_health", "Financial Health", "#10b981"),
    ("management_quality", "Management Quality", "#f59e0b"),
    ("growth_potential", "Growth Potential", "#ec4899"),
    ("regulatory_risk", "Regulatory Risk", "#ef4444"),
    ("esg_compliance", "ESG Compliance", "#22d3ee"),
    ("synergy_potential", "Synergy Potential", "#8b5cf6"),
    ("valuation_attractiveness", "Valuation", "#f97316"),
]

MIN_SCORE = 1.0
MAX_SCORE = 10.0
STRENGTH_THRESHOLD = 8.0
CONCERN_THRESHOLD = 5.0


def _normalized_weights(weights: DealDimensionScores | None) -> dict[str, float]:
    raw = (weights or DEFAULT_WEIGHTS).model_dump()
    total = sum(raw.values())
    if total <= 0:
        logger.warning("Deal weights sum to zero or less, using default weights")
        raw = DEFAULT_WEIGHTS.model_dump()
        total = sum(raw.values())
    return {k: v / total for k, v in raw.items()}


def _assess(score: float) -> str:
    if score >= 8:
        return "Strong: exceeds benchmark expectations."
    if score >= 6:
        return "Adequate: meets minimum threshold."
    if score >= 4:
        return "Below average: requires deeper due diligence."
    return "Weak: significant concern identified."


def rate(overall_score: float) -> Rating:
    if overall_score >= 8.0:
        return "Highly Attractive"
    if overall_score >= 6.5:
        return "Attractive"
    if overall_score >= 5.0:
        return "Neutral"
    if overall_score >= 3.5:
        return "Cautious"
    return "Pass"


def score_deal(request: DealScoringRequest) -> DealScoringResult:
    weights = _normalized_weights(request.weights)
    scores = request.scores.model_dump()

    dimensions: list[DealDimension] = []
    for key, name, color in _DIMENSIONS:
        score = min(MAX_SCORE, max(MIN_SCORE, scores[key]))
        weight = weights[key]
        dimensions.append(DealDimension(
            name=name,
            score=score,
            weight=weight,
            weighted_score=score * weight,
            assessment=_assess(score),
            color=color,
        ))

    overall = sum(d.weighted_score for d in dimensions)
    rating = rate(overall)

    strengths = [d.name for d in dimensions if d.score >= STRENGTH_THRESHOLD]
    concerns = [d.name for d in dimensions if d.score < CONCERN_THRESHOLD]

    recommendation = f"Overall deal attractiveness: {rating} ({overall:.1f}/10)."
    if strengths:
        recommendation += f" Key strengths: {', '.join(strengths)}."
    if concerns:
        recommendation += (
            f" Areas of concern: {', '.join(concerns)}; "
            f"recommend enhanced due diligence on these dimensions."
        )

    return DealScoringResult(
        company_name=request.company_name,
        overall_score=overall,
        rating=rating,
        dimensions=dimensions,
        radar_chart_data=[
            RadarPoint(dimension=d.name, score=d.score, weight=d.weight, weighted_score=d.weighted_score)
            for d in dimensions
        ],
        recommendation=recommendation,
    )
