"""Bucketed multiplier selection and the direction guard."""

from __future__ import annotations

import logging

from batch_engine.app.errors import AdjustmentDirectionViolation
from batch_engine.app.schemas import AdjustmentDirection

from . import config as cfg

logger = logging.getLogger(__name__)


def select_multiplier(consumption_rate: float, direction: AdjustmentDirection) -> float:
    """
    Monotonic in the rate: lower consumption cuts harder on reduce, higher
    consumption bumps harder on increase.
    """
    if AdjustmentDirection(direction) is AdjustmentDirection.REDUCE:
        for upper, multiplier in cfg.REDUCE_BUCKETS:
            if consumption_rate < upper:
                return multiplier
        return cfg.REDUCE_DEFAULT

    for lower, multiplier in cfg.INCREASE_BUCKETS:
        if consumption_rate > lower:
            return multiplier
    return cfg.INCREASE_DEFAULT


def percent_change(multiplier: float) -> int:
    return abs(round((multiplier - 1) * 100))


def check_direction(
    dish_name: str,
    direction: AdjustmentDirection,
    multiplier: float,
    old_batch2: int,
    new_batch2: int,
    old_batch3: int,
    new_batch3: int,
) -> None:
    """Raise AdjustmentDirectionViolation unless the new quantities moved the requested way.

    reduce: batch 2 strictly lower (an empty batch 2 may stay empty), batch 3 not higher.
    increase: batch 2 strictly higher, batch 3 not lower.
    """
    if direction is AdjustmentDirection.REDUCE:
        batch2_ok = new_batch2 < old_batch2 if old_batch2 > 0 else new_batch2 == old_batch2
        batch3_ok = new_batch3 <= old_batch3
    else:
        batch2_ok = new_batch2 > old_batch2
        batch3_ok = new_batch3 >= old_batch3

    if batch2_ok and batch3_ok:
        return

    logger.error(
        "Rejected %s on %s: batch 2 %d->%d, batch 3 %d->%d (x%s)",
        direction.value,
        dish_name,
        old_batch2,
        new_batch2,
        old_batch3,
        new_batch3,
        multiplier,
    )
    raise AdjustmentDirectionViolation(
        dish_name=dish_name,
        direction=direction.value,
        multiplier=multiplier,
        old_batch2=old_batch2,
        attempted_batch2=new_batch2,
        old_batch3=old_batch3,
        attempted_batch3=new_batch3,
    )
