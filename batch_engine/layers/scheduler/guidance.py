"""Human-readable scheduling guidance attached to each batch strategy."""

from __future__ import annotations

from datetime import datetime, time, timedelta

from batch_engine.app.schemas import DishCategory, MealTime, RiskLevel

from . import config as cfg

_CLOCK_ANCHOR = datetime(2000, 1, 1)

CATEGORY_COOKING_NOTES = {
    DishCategory.MAIN_COURSE: (
        "Cook curries and gravies in batches; hold batch 1 on warmers and finish later "
        "batches close to serving."
    ),
    DishCategory.NON_VEG_STARTER: (
        "Marinate everything ahead but fry or grill in short runs; fried starters lose "
        "quality within 20 minutes."
    ),
    DishCategory.VEG_STARTER: "Prep ingredients ahead and fry or grill to order in short runs.",
    DishCategory.DESSERT: "Prepare batch 1 ahead and chill; keep later batches unplated until needed.",
    DishCategory.DRINKS: "Mix concentrates ahead; dilute and chill in small lots as refills are requested.",
}

RISK_COOKING_NOTES = {
    RiskLevel.HIGH: "High waste exposure: do not start the next batch before its trigger is met.",
    RiskLevel.MEDIUM: "Check consumption before committing each batch.",
    RiskLevel.LOW: "Standard pacing is fine.",
}

ADJUSTMENT_STRATEGIES = {
    RiskLevel.HIGH: (
        "Review after every batch. Reduce batches 2 and 3 when batch 1 is under half served "
        "at its trigger time; increase only when batch 1 is over 90% served."
    ),
    RiskLevel.MEDIUM: (
        "Review when batch 1 reaches its trigger. Reduce the remaining batches if consumption "
        "is slow, increase if batch 1 runs out early."
    ),
    RiskLevel.LOW: (
        "Single review point before batch 2. Adjust only if consumption clearly departs "
        "from plan."
    ),
}


def shift(clock: time, minutes: int) -> str:
    """Clock time ``minutes`` after (or before, if negative) ``clock`` as HH:MM."""
    moment = datetime.combine(_CLOCK_ANCHOR.date(), clock) + timedelta(minutes=minutes)
    return moment.strftime("%H:%M")


def batch2_trigger_percent(category: DishCategory, risk_level: RiskLevel) -> int:
    percent = cfg.BATCH2_TRIGGER_PERCENT[risk_level]
    if category is DishCategory.DRINKS:
        percent += cfg.DRINKS_TRIGGER_OFFSET
    return percent


def batch3_trigger_percent(category: DishCategory, risk_level: RiskLevel) -> int:
    percent = cfg.BATCH3_TRIGGER_PERCENT[risk_level]
    if category is DishCategory.DRINKS:
        percent += cfg.DRINKS_TRIGGER_OFFSET
    return percent


def trigger_condition(category: DishCategory, risk_level: RiskLevel, has_batch3: bool) -> str:
    text = (
        f"Start batch 2 once batch 1 is at least "
        f"{batch2_trigger_percent(category, risk_level)}% served"
    )
    if has_batch3:
        text += (
            f"; start batch 3 once batch 2 is at least "
            f"{batch3_trigger_percent(category, risk_level)}% served"
        )
    return text


def batch1_start_time(category: DishCategory, meal_time: MealTime) -> str:
    service = cfg.SERVICE_START[meal_time]
    lead = cfg.BATCH1_LEAD_MINUTES[category]
    return (
        f"{shift(service, -lead)} ({lead} minutes before {meal_time.value} service "
        f"at {service.strftime('%H:%M')})"
    )


def batch2_timing(
    category: DishCategory,
    risk_level: RiskLevel,
    meal_time: MealTime,
    batch1_quantity: int,
    total_portions: int,
) -> str:
    """Batch 2 follows live consumption; the clock time is only the on-plan estimate."""
    percent = batch2_trigger_percent(category, risk_level)
    share = batch1_quantity / total_portions if total_portions else 0.0
    offset = round(cfg.SERVICE_WINDOW_MINUTES * share * percent / 100)
    expected = shift(cfg.SERVICE_START[meal_time], offset)
    return (
        f"When batch 1 reaches {percent}% served, not at a fixed time "
        f"(around {expected} if consumption follows plan)"
    )


def adjustment_strategy(risk_level: RiskLevel) -> str:
    return ADJUSTMENT_STRATEGIES[risk_level]


def cooking_timing_suggestion(category: DishCategory, risk_level: RiskLevel) -> str:
    return f"{CATEGORY_COOKING_NOTES[category]} {RISK_COOKING_NOTES[risk_level]}"
