"""Live adjustment: observed consumption -> revised quantities for batches not yet cooked."""

import logging
import math
from typing import Optional

from batch_engine.app.errors import InvalidInputError
from batch_engine.app.schemas import (
    AdjustmentDirection,
    AdjustmentResult,
    BatchStrategy,
    ConsumptionObservation,
)
from batch_engine.layers.rounding import round_half_up

from . import progress
from .locks import DishLockRegistry, dish_locks
from .multipliers import check_direction, percent_change, select_multiplier

logger = logging.getLogger(__name__)


def observe(strategy: BatchStrategy, observed_consumption: Optional[float]) -> ConsumptionObservation:
    """consumption_rate = observed portions / batch 1 quantity."""
    if observed_consumption is None or not math.isfinite(observed_consumption) or observed_consumption < 0:
        raise InvalidInputError(
            f"observed consumption must be a finite non-negative number, got {observed_consumption}",
            dish_name=strategy.dish_name,
        )
    if strategy.batch1_quantity <= 0:
        raise InvalidInputError(
            f"batch 1 of '{strategy.dish_name}' has no portions; no consumption rate can be formed",
            dish_name=strategy.dish_name,
        )
    return ConsumptionObservation(
        consumed_portions=float(observed_consumption),
        consumption_rate=observed_consumption / strategy.batch1_quantity,
    )


def apply_adjustment(
    strategy: BatchStrategy,
    observed_consumption: Optional[float],
    direction: AdjustmentDirection,
) -> AdjustmentResult:
    """
    Scale batches 2 and 3 by the multiplier for the observed rate.

    Batch 1 and total_portions are never touched. Fails closed with
    AdjustmentDirectionViolation instead of applying a wrong-direction change.
    """
    try:
        direction = AdjustmentDirection(direction)
    except ValueError:
        raise InvalidInputError(f"unknown adjustment direction {direction!r}", direction=str(direction))

    observation = observe(strategy, observed_consumption)
    multiplier = select_multiplier(observation.consumption_rate, direction)

    old_batch2 = strategy.batch2_quantity
    old_batch3 = strategy.batch3_quantity
    new_batch2 = round_half_up(old_batch2 * multiplier)
    new_batch3 = round_half_up(old_batch3 * multiplier)

    check_direction(strategy.dish_name, direction, multiplier, old_batch2, new_batch2, old_batch3, new_batch3)

    logger.info(
        "Adjusted %s (%s, rate %.3f, x%s): batch 2 %d->%d, batch 3 %d->%d",
        strategy.dish_name,
        direction.value,
        observation.consumption_rate,
        multiplier,
        old_batch2,
        new_batch2,
        old_batch3,
        new_batch3,
    )
    updated = strategy.model_copy(update={"batch2_quantity": new_batch2, "batch3_quantity": new_batch3})
    return AdjustmentResult(
        strategy=updated,
        observation=observation,
        direction=direction,
        multiplier=multiplier,
        percent_change=percent_change(multiplier),
        previous_batch2_quantity=old_batch2,
        previous_batch3_quantity=old_batch3,
    )


def adjust(
    strategy: BatchStrategy,
    observed_consumption: Optional[float],
    direction: AdjustmentDirection,
) -> BatchStrategy:
    return apply_adjustment(strategy, observed_consumption, direction).strategy


__all__ = [
    "adjust",
    "apply_adjustment",
    "observe",
    "progress",
    "DishLockRegistry",
    "dish_locks",
    "select_multiplier",
    "check_direction",
]
