"""
Configuration for the portion estimator.
"""

from batch_engine.app.schemas import DishCategory

# Share of the guest count expected to take a dish from each category.
# Drinks exceed 1.0 because of refills.
CATEGORY_CONSUMPTION_RATIOS = {
    DishCategory.VEG_STARTER: 0.65,
    DishCategory.NON_VEG_STARTER: 0.65,
    DishCategory.MAIN_COURSE: 0.85,
    DishCategory.DESSERT: 0.55,
    DishCategory.DRINKS: 1.30,
}

# Per-dish portion counts outside this band are flagged in category previews
MIN_REASONABLE_PORTIONS = 10
MAX_REASONABLE_GUEST_SHARE = 0.8
