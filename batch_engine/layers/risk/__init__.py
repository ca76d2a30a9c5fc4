"""Risk classification: dish volume, category and event context -> score and level."""

from batch_engine.app.schemas import DishCategory, EventContext, RiskAssessment

from .scoring import level_for_score, score_factors, total_score


def classify(category: DishCategory, total_portions: int, context: EventContext) -> RiskAssessment:
    """Pure: identical inputs always give the identical score and level."""
    factors = score_factors(category, total_portions, context)
    score = total_score(factors)
    return RiskAssessment(risk_score=score, risk_level=level_for_score(score), factors=factors)


__all__ = ["classify", "level_for_score", "score_factors", "total_score"]
