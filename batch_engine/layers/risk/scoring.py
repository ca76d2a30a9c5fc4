"""
Waste/shortage risk scoring for a single dish.
"""
from __future__ import annotations

from batch_engine.app.schemas import DishCategory, EventContext, RiskLevel, Weather

from . import config as cfg


def _band_points(value: int, bands: list[tuple[int, int]]) -> int:
    for minimum, points in bands:
        if value >= minimum:
            return points
    return 0


def volume_points(total_portions: int, guest_count: int) -> int:
    """More portions per guest means more food exposed to waste."""
    if guest_count <= 0 or total_portions <= 0:
        return 0
    return min(cfg.VOLUME_POINTS_MAX, round(cfg.VOLUME_POINTS_MAX * total_portions / guest_count))


def score_factors(category: DishCategory, total_portions: int, context: EventContext) -> dict[str, int]:
    """Points contributed by each factor. Zero-point factors are omitted."""
    category = DishCategory(category)
    factors = {
        "category": cfg.CATEGORY_BASE_POINTS[category],
        "volume": volume_points(total_portions, context.guest_count),
    }

    if category in cfg.PERISHABLE_CATEGORIES:
        if context.weather is Weather.SUNNY:
            factors["sunny"] = cfg.SUNNY_PERISHABLE_POINTS
        factors["temperature"] = _band_points(context.temperature, cfg.TEMPERATURE_BANDS)

    factors["weather"] = cfg.WEATHER_POINTS.get(context.weather, 0)
    factors["guest_count"] = _band_points(context.guest_count, cfg.GUEST_COUNT_BANDS)
    factors["event_type"] = cfg.EVENT_TYPE_POINTS.get(context.event_type, 0)

    if category is DishCategory.NON_VEG_STARTER:
        factors["dietary"] = cfg.DIETARY_NON_VEG_POINTS * len(context.dietary_requirements)
    if category is DishCategory.MAIN_COURSE and context.kid_percentage >= cfg.KID_SHARE_THRESHOLD:
        factors["kids"] = cfg.KID_MAIN_COURSE_POINTS

    return {name: points for name, points in factors.items() if points}


def total_score(factors: dict[str, int]) -> int:
    return max(cfg.SCORE_MIN, min(cfg.SCORE_MAX, sum(factors.values())))


def level_for_score(score: int) -> RiskLevel:
    """33 -> low, 34 -> medium, 66 -> medium, 67 -> high."""
    if score >= cfg.HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if score >= cfg.MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW
