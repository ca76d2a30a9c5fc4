"""LRU cache for risk classification. Key = (category, total portions, frozen event context)."""

from functools import lru_cache

from batch_engine.app.config import get_settings
from batch_engine.app.schemas import DishCategory, EventContext, MenuItem, RiskAssessment
from batch_engine.layers import risk

CACHE_MAXSIZE = get_settings().risk_cache_maxsize


@lru_cache(maxsize=CACHE_MAXSIZE)
def _cached_classify_impl(category: DishCategory, total_portions: int, context: EventContext) -> RiskAssessment:
    """Internal: hashable arguments only."""
    return risk.classify(category, total_portions, context)


def cached_classification(category: DishCategory, total_portions: int, context: EventContext) -> RiskAssessment:
    """Return a classification, computing it at most once per distinct input."""
    result = _cached_classify_impl(DishCategory(category), int(total_portions), context)
    # callers may mutate what they get back; the cached copy must stay intact
    return result.model_copy(deep=True)


def warmup_cache() -> None:
    """Run one classification so the scoring path is imported and exercised before traffic."""
    context = EventContext(guest_count=100)
    dish = MenuItem(name="warmup", category=DishCategory.MAIN_COURSE)
    cached_classification(dish.category, 85, context)


def clear_cache() -> None:
    _cached_classify_impl.cache_clear()
