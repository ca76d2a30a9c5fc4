"""Batch scheduling: splits, conservation and timing guidance."""

import pytest

from batch_engine.app.schemas import DishCategory, MealTime, RiskLevel
from batch_engine.layers import scheduler
from batch_engine.layers.scheduler import guidance
from batch_engine.layers.scheduler.splitter import split


def test_high_risk_three_batch_split():
    assert split(170, RiskLevel.HIGH) == (68, 59, 43)


def test_medium_risk_three_batch_split():
    assert split(100, RiskLevel.MEDIUM) == (45, 35, 20)


def test_low_risk_is_a_two_batch_plan():
    assert split(100, RiskLevel.LOW) == (70, 30, 0)


@pytest.mark.parametrize("level", list(RiskLevel))
def test_split_conserves_every_portion(level):
    for total in range(0, 501):
        batches = split(total, level)
        assert sum(batches) == total
        assert all(b >= 0 for b in batches)


def test_negative_total_is_rejected():
    with pytest.raises(ValueError):
        split(-1, RiskLevel.LOW)


def test_schedule_high_risk_main_course():
    strategy = scheduler.schedule("Paneer Butter Masala", DishCategory.MAIN_COURSE, 170, RiskLevel.HIGH, 77)
    assert (strategy.batch1_quantity, strategy.batch2_quantity, strategy.batch3_quantity) == (68, 59, 43)
    assert strategy.scheduled_portions == strategy.total_portions == 170
    assert strategy.has_batch3
    assert strategy.batch1_start_time == "11:45 (45 minutes before lunch service at 12:30)"
    assert strategy.batch2_timing == (
        "When batch 1 reaches 75% served, not at a fixed time (around 13:06 if consumption follows plan)"
    )
    assert strategy.trigger_condition == (
        "Start batch 2 once batch 1 is at least 75% served; "
        "start batch 3 once batch 2 is at least 80% served"
    )


def test_low_risk_trigger_mentions_no_third_batch():
    strategy = scheduler.schedule("Jeera Rice", DishCategory.MAIN_COURSE, 100, RiskLevel.LOW, 20)
    assert not strategy.has_batch3
    assert "batch 3" not in strategy.trigger_condition


def test_drinks_trigger_earlier():
    assert guidance.batch2_trigger_percent(DishCategory.DRINKS, RiskLevel.HIGH) == 65
    assert guidance.batch2_trigger_percent(DishCategory.MAIN_COURSE, RiskLevel.HIGH) == 75


def test_dinner_start_time():
    assert guidance.batch1_start_time(DishCategory.DESSERT, MealTime.DINNER) == (
        "18:30 (60 minutes before dinner service at 19:30)"
    )


def test_schedule_is_deterministic():
    args = ("Chicken Tikka", DishCategory.NON_VEG_STARTER, 130, RiskLevel.MEDIUM, 50, MealTime.DINNER)
    assert scheduler.schedule(*args) == scheduler.schedule(*args)


def test_zero_portion_dish_gets_an_empty_plan():
    strategy = scheduler.schedule("Kulfi", DishCategory.DESSERT, 0, RiskLevel.LOW, 10)
    assert strategy.scheduled_portions == 0
    assert "around 12:30" in strategy.batch2_timing
