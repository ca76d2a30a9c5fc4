"""
Configuration for the batch scheduler.
"""

from datetime import time

from batch_engine.app.schemas import DishCategory, MealTime, RiskLevel

# Share of total portions per batch (batch1, batch2, batch3). Batch 1 share is
# nominal: batch 1 absorbs the rounding remainder.
BATCH_SPLITS = {
    RiskLevel.HIGH: (0.40, 0.35, 0.25),
    RiskLevel.MEDIUM: (0.45, 0.35, 0.20),
    RiskLevel.LOW: (0.70, 0.30, 0.0),
}

SERVICE_START = {
    MealTime.LUNCH: time(12, 30),
    MealTime.DINNER: time(19, 30),
}

# Expected length of service, used to estimate when a trigger fires
SERVICE_WINDOW_MINUTES = 120

# How long before service batch 1 goes on the stove
BATCH1_LEAD_MINUTES = {
    DishCategory.MAIN_COURSE: 45,
    DishCategory.NON_VEG_STARTER: 30,
    DishCategory.VEG_STARTER: 30,
    DishCategory.DESSERT: 60,
    DishCategory.DRINKS: 15,
}

# Percent of batch 1 served before batch 2 starts
BATCH2_TRIGGER_PERCENT = {
    RiskLevel.HIGH: 75,
    RiskLevel.MEDIUM: 65,
    RiskLevel.LOW: 60,
}

# Percent of batch 2 served before batch 3 starts
BATCH3_TRIGGER_PERCENT = {
    RiskLevel.HIGH: 80,
    RiskLevel.MEDIUM: 75,
    RiskLevel.LOW: 75,
}

# Refills move fast; start the next drinks batch earlier
DRINKS_TRIGGER_OFFSET = -10
