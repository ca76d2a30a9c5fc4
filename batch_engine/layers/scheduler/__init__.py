"""Batch scheduling: total portions and risk level -> a multi-batch cooking plan."""

from batch_engine.app.schemas import BatchStrategy, DishCategory, MealTime, RiskLevel

from . import guidance
from .splitter import split


def schedule(
    dish_name: str,
    category: DishCategory,
    total_portions: int,
    risk_level: RiskLevel,
    risk_score: int,
    meal_time: MealTime = MealTime.LUNCH,
) -> BatchStrategy:
    """Deterministic: the same inputs always produce the same strategy."""
    category = DishCategory(category)
    risk_level = RiskLevel(risk_level)
    meal_time = MealTime(meal_time)

    batch1, batch2, batch3 = split(total_portions, risk_level)
    return BatchStrategy(
        dish_name=dish_name,
        dish_category=category,
        total_portions=total_portions,
        batch1_quantity=batch1,
        batch2_quantity=batch2,
        batch3_quantity=batch3,
        batch1_start_time=guidance.batch1_start_time(category, meal_time),
        batch2_timing=guidance.batch2_timing(category, risk_level, meal_time, batch1, total_portions),
        trigger_condition=guidance.trigger_condition(category, risk_level, batch3 > 0),
        risk_level=risk_level,
        risk_score=risk_score,
        adjustment_strategy=guidance.adjustment_strategy(risk_level),
        cooking_timing_suggestion=guidance.cooking_timing_suggestion(category, risk_level),
    )


__all__ = ["schedule", "split", "guidance"]
