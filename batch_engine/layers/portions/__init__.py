"""Portion estimation: guest count and category ratios -> portions per dish."""

from .config import CATEGORY_CONSUMPTION_RATIOS
from .estimator import estimate, portions_for, preview_category

__all__ = [
    "CATEGORY_CONSUMPTION_RATIOS",
    "estimate",
    "portions_for",
    "preview_category",
]
