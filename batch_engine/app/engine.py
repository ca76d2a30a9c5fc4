"""Straight-through pipeline: portions -> risk -> scheduler. Adjustment runs per dish on operator input.

The four public operations are estimate_portions, classify_risk,
build_strategies and adjust_batch. None of them performs I/O.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Union

from pydantic import ValidationError

from batch_engine.app.cache import cached_classification
from batch_engine.app.errors import InvalidInputError, UnknownDishError
from batch_engine.app.schemas import (
    AdjustmentDirection,
    AdjustmentResult,
    BatchProgressState,
    BatchStrategy,
    DishCategory,
    EventContext,
    MenuItem,
    RiskAssessment,
)
from batch_engine.layers import adjustment, portions, scheduler
from batch_engine.layers.adjustment import progress

logger = logging.getLogger(__name__)

StrategySet = Union[Mapping, Iterable[BatchStrategy], BatchStrategy]


def _coerce_item(item: Any) -> MenuItem:
    if isinstance(item, MenuItem):
        return item
    try:
        return MenuItem.model_validate(item)
    except ValidationError as e:
        raise InvalidInputError(f"malformed menu item: {e.errors(include_url=False, include_context=False)}")


def _coerce_items(items: Iterable[Any]) -> List[MenuItem]:
    if items is None:
        raise InvalidInputError("menu items are required")
    return [_coerce_item(item) for item in items]


def _check_context(context: Any) -> EventContext:
    """Ensure the event context is usable: positive guests, demographics summing to 100."""
    if not isinstance(context, EventContext):
        try:
            context = EventContext.model_validate(context)
        except ValidationError as e:
            raise InvalidInputError(f"malformed event context: {e.errors(include_url=False, include_context=False)}")
    if context.guest_count <= 0:
        raise InvalidInputError(f"guest count must be positive, got {context.guest_count}")
    if context.adult_percentage + context.kid_percentage != 100:
        raise InvalidInputError(
            f"adult and kid percentages must sum to 100, got "
            f"{context.adult_percentage} + {context.kid_percentage}"
        )
    return context


def _check_conservation(strategy: BatchStrategy) -> BatchStrategy:
    """A fresh strategy must schedule exactly its total portions."""
    if strategy.scheduled_portions != strategy.total_portions:
        raise ValueError(
            f"Scheduler output for '{strategy.dish_name}' schedules {strategy.scheduled_portions} "
            f"of {strategy.total_portions} portions"
        )
    return strategy


def find_strategy(strategies: StrategySet, dish_name: str) -> BatchStrategy:
    """Look a dish up by name in a strategy set (mapping, iterable or single strategy)."""
    if isinstance(strategies, BatchStrategy):
        strategies = [strategies]
    if isinstance(strategies, Mapping):
        found = strategies.get(dish_name)
    else:
        found = next((s for s in strategies or [] if s.dish_name == dish_name), None)
    if found is None:
        raise UnknownDishError(dish_name)
    return found


def estimate_portions(
    guest_count: int,
    items: Iterable[Any],
    categories: Optional[Iterable[DishCategory]] = None,
) -> List[MenuItem]:
    """Fill in portions per dish; manually edited dishes pass through untouched."""
    return portions.estimate(guest_count, _coerce_items(items), categories)


def classify_risk(dish: Any, total_portions: int, context: Any) -> RiskAssessment:
    dish = _coerce_item(dish)
    context = _check_context(context)
    if total_portions is None or total_portions < 0:
        raise InvalidInputError(f"total portions must be >= 0, got {total_portions}")
    return cached_classification(dish.category, total_portions, context)


def build_strategies(context: Any, approved_menu: Iterable[Any]) -> List[BatchStrategy]:
    """Full recompute of one strategy per approved dish, in menu order."""
    context = _check_context(context)
    items = _coerce_items(approved_menu)
    if not items:
        raise InvalidInputError("approved menu is empty; at least one dish is required")

    seen = set()
    for item in items:
        if item.name in seen:
            raise InvalidInputError(f"duplicate dish '{item.name}' in approved menu", dish_name=item.name)
        seen.add(item.name)

    # 1. Portion estimate (manual edits preserved)
    estimated = portions.estimate(context.guest_count, items)

    strategies = []
    for item in estimated:
        total = item.planned_portions
        # 2. Risk classification
        risk = classify_risk(item, total, context)
        # 3. Batch schedule
        strategy = scheduler.schedule(
            dish_name=item.name,
            category=item.category,
            total_portions=total,
            risk_level=risk.risk_level,
            risk_score=risk.risk_score,
            meal_time=context.meal_time,
        )
        strategies.append(_check_conservation(strategy))

    logger.info(
        "Built %d batch strategies for %d guests (%s)",
        len(strategies),
        context.guest_count,
        ", ".join(f"{s.dish_name}={s.risk_level.value}" for s in strategies),
    )
    return strategies


def adjust_batch(
    dish_name: str,
    direction: AdjustmentDirection,
    strategies: StrategySet,
    observed_consumption: Optional[float] = None,
    progress_state: Optional[BatchProgressState] = None,
) -> AdjustmentResult:
    """
    Recompute the remaining batches of one dish from a consumption signal.

    When ``progress_state`` is given the adjustment is gated on it (batch 1
    complete, batch 2 not complete) and, without an explicit observed
    consumption, the consumed portions are estimated from it.
    """
    strategy = find_strategy(strategies, dish_name)

    if progress_state is not None:
        progress.ensure_adjustable(progress_state, dish_name)
        if observed_consumption is None:
            observed_consumption = progress.estimate_consumed_portions(strategy, progress_state)
    elif observed_consumption is None:
        raise InvalidInputError(
            f"no consumption signal for '{dish_name}': give observed consumption or batch progress",
            dish_name=dish_name,
        )

    return adjustment.apply_adjustment(strategy, observed_consumption, direction)
