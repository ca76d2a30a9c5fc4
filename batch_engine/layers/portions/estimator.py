"""Per-category portion estimation for menu items."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from batch_engine.app.errors import InvalidInputError
from batch_engine.app.schemas import CategoryPreview, DishCategory, MenuItem
from batch_engine.layers.rounding import round_half_up

from .config import (
    CATEGORY_CONSUMPTION_RATIOS,
    MAX_REASONABLE_GUEST_SHARE,
    MIN_REASONABLE_PORTIONS,
)

logger = logging.getLogger(__name__)


def _require_guests(guest_count: int) -> None:
    if guest_count is None or int(guest_count) <= 0:
        raise InvalidInputError(f"guest count must be positive, got {guest_count}", guest_count=guest_count)


def portions_for(guest_count: int, category: DishCategory, dish_count: int) -> int:
    """guest_count * ratio / dish_count, rounded half up, for one dish of the category."""
    if dish_count <= 0:
        return 0
    ratio = CATEGORY_CONSUMPTION_RATIOS[DishCategory(category)]
    return round_half_up(guest_count * ratio / dish_count)


def estimate(
    guest_count: int,
    items: list[MenuItem],
    categories: Iterable[DishCategory] | None = None,
) -> list[MenuItem]:
    """
    Fill in estimated_portions for every item that is not manually edited.

    Items are returned in input order as new objects; manually edited items are
    returned unchanged. When ``categories`` is given only those categories are
    recomputed (after a dish was added to or removed from them).
    """
    _require_guests(guest_count)
    counts = Counter(item.category for item in items)
    only = {DishCategory(c) for c in categories} if categories is not None else None

    out = []
    for item in items:
        if item.is_manually_edited or (only is not None and item.category not in only):
            out.append(item)
            continue
        portions = portions_for(guest_count, item.category, counts[item.category])
        logger.debug(
            "%s (%s): %d guests x %.2f / %d dishes = %d portions",
            item.name,
            item.category.value,
            guest_count,
            CATEGORY_CONSUMPTION_RATIOS[item.category],
            counts[item.category],
            portions,
        )
        out.append(item.model_copy(update={"estimated_portions": portions}))
    return out


def preview_category(guest_count: int, category: DishCategory, dish_count: int) -> CategoryPreview:
    """Servings for a whole category and what each of ``dish_count`` dishes would get."""
    _require_guests(guest_count)
    category = DishCategory(category)
    ratio = CATEGORY_CONSUMPTION_RATIOS[category]
    total_servings = round_half_up(guest_count * ratio)
    per_dish = round_half_up(total_servings / dish_count) if dish_count > 0 else 0
    reasonable = dish_count > 0 and MIN_REASONABLE_PORTIONS <= per_dish <= guest_count * MAX_REASONABLE_GUEST_SHARE
    return CategoryPreview(
        category=category,
        total_servings=total_servings,
        portions_per_dish=per_dish,
        is_reasonable=reasonable,
        formula=f"({guest_count} guests x {ratio}) / {dish_count} dishes",
    )
