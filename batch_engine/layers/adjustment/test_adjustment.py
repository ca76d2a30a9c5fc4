"""Live adjustment: multiplier buckets, the direction guard and per-dish locking."""

import gc
import threading
import time

import pytest

from batch_engine.app.errors import AdjustmentDirectionViolation, InvalidInputError
from batch_engine.app.schemas import AdjustmentDirection, DishCategory, RiskLevel
from batch_engine.layers import adjustment, scheduler
from batch_engine.layers.adjustment import DishLockRegistry, select_multiplier
from batch_engine.layers.adjustment.multipliers import percent_change

REDUCE = AdjustmentDirection.REDUCE
INCREASE = AdjustmentDirection.INCREASE


@pytest.fixture
def strategy():
    """170 portions, high risk: 68 / 59 / 43."""
    return scheduler.schedule("Paneer Butter Masala", DishCategory.MAIN_COURSE, 170, RiskLevel.HIGH, 77)


def _with_batches(strategy, batch1, batch2, batch3):
    return strategy.model_copy(update={
        "total_portions": batch1 + batch2 + batch3,
        "batch1_quantity": batch1,
        "batch2_quantity": batch2,
        "batch3_quantity": batch3,
    })


@pytest.mark.parametrize(
    "rate,expected",
    [(0.0, 0.68), (0.49, 0.68), (0.50, 0.82), (0.74, 0.82), (0.75, 0.93), (1.3, 0.93)],
)
def test_reduce_multiplier_buckets(rate, expected):
    assert select_multiplier(rate, REDUCE) == expected


@pytest.mark.parametrize(
    "rate,expected",
    [(0.2, 1.08), (0.75, 1.08), (0.76, 1.12), (0.90, 1.12), (0.91, 1.18), (1.5, 1.18)],
)
def test_increase_multiplier_buckets(rate, expected):
    assert select_multiplier(rate, INCREASE) == expected


def test_percent_change():
    assert percent_change(0.68) == 32
    assert percent_change(0.82) == 18
    assert percent_change(1.08) == 8


def test_reduce_after_slow_first_batch(strategy):
    result = adjustment.apply_adjustment(strategy, 40, REDUCE)
    assert result.observation.consumption_rate == pytest.approx(40 / 68)
    assert result.multiplier == 0.82
    assert (result.strategy.batch2_quantity, result.strategy.batch3_quantity) == (48, 35)
    assert (result.previous_batch2_quantity, result.previous_batch3_quantity) == (59, 43)
    # batch 1 and the planned total never change
    assert result.strategy.batch1_quantity == 68
    assert result.strategy.total_portions == 170
    # the input strategy is left as it was
    assert strategy.batch2_quantity == 59


def test_reduce_cuts_harder_when_consumption_is_lower(strategy):
    slow = adjustment.adjust(strategy, 30, REDUCE)
    steady = adjustment.adjust(strategy, 51, REDUCE)
    assert (slow.batch2_quantity, slow.batch3_quantity) == (40, 29)
    assert (steady.batch2_quantity, steady.batch3_quantity) == (55, 40)


def test_increase_when_first_batch_nearly_gone(strategy):
    result = adjustment.apply_adjustment(strategy, 65, INCREASE)
    assert result.multiplier == 1.18
    assert (result.strategy.batch2_quantity, result.strategy.batch3_quantity) == (70, 51)


def test_reduce_then_increase_does_not_restore_the_plan(strategy):
    reduced = adjustment.adjust(strategy, 40, REDUCE)
    restored = adjustment.adjust(reduced, 65, INCREASE)
    assert restored.batch2_quantity != strategy.batch2_quantity


@pytest.mark.parametrize("direction", [REDUCE, INCREASE])
def test_tiny_batch2_cannot_move_and_is_rejected(strategy, direction):
    small = _with_batches(strategy, 10, 1, 0)
    with pytest.raises(AdjustmentDirectionViolation) as excinfo:
        adjustment.apply_adjustment(small, 5, direction)
    err = excinfo.value
    assert err.old_batch2 == 1
    assert err.attempted_batch2 == 1
    assert err.direction == direction.value
    assert err.to_dict()["error"] == "adjustment_direction_violation"


def test_reduce_on_empty_remaining_batches_is_a_no_op(strategy):
    done = _with_batches(strategy, 50, 0, 0)
    result = adjustment.apply_adjustment(done, 10, REDUCE)
    assert result.strategy.batch2_quantity == 0
    assert result.strategy.batch3_quantity == 0


@pytest.mark.parametrize("direction", [REDUCE, INCREASE])
def test_accepted_adjustments_always_move_the_requested_way(strategy, direction):
    for old_batch2 in range(0, 121):
        for old_batch3 in (0, 1, 7, 40):
            base = _with_batches(strategy, 100, old_batch2, old_batch3)
            for observed in (0, 30, 50, 60, 75, 80, 90, 95, 120):
                try:
                    result = adjustment.apply_adjustment(base, observed, direction)
                except AdjustmentDirectionViolation:
                    continue
                new = result.strategy
                if direction is REDUCE:
                    assert new.batch2_quantity < old_batch2 or old_batch2 == new.batch2_quantity == 0
                    assert new.batch3_quantity <= old_batch3
                else:
                    assert new.batch2_quantity > old_batch2
                    assert new.batch3_quantity >= old_batch3


@pytest.mark.parametrize("observed", [-1, float("nan"), float("inf"), float("-inf")])
def test_negative_or_non_finite_observation_is_rejected(strategy, observed):
    with pytest.raises(InvalidInputError):
        adjustment.adjust(strategy, observed, REDUCE)


def test_missing_observation_is_rejected(strategy):
    with pytest.raises(InvalidInputError):
        adjustment.adjust(strategy, None, REDUCE)


def test_empty_first_batch_gives_no_rate(strategy):
    with pytest.raises(InvalidInputError):
        adjustment.adjust(_with_batches(strategy, 0, 10, 5), 3, REDUCE)


def test_unknown_direction_is_rejected(strategy):
    with pytest.raises(InvalidInputError):
        adjustment.adjust(strategy, 40, "sideways")


# --- locks ---

def test_lock_is_per_dish():
    locks = DishLockRegistry()
    dal = locks.lock_for(1, "Dal")
    kheer = locks.lock_for(1, "Kheer")
    other_event = locks.lock_for(2, "Dal")
    assert locks.lock_for(1, "Dal") is dal
    assert dal is not kheer
    assert dal is not other_event
    assert len(locks) == 3


def test_unreferenced_locks_are_dropped():
    locks = DishLockRegistry()
    held = locks.lock_for(1, "Dal")
    for event_id in range(2, 50):
        locks.lock_for(event_id, "Dal")
    gc.collect()
    assert len(locks) == 1
    assert locks.lock_for(1, "Dal") is held
    del held
    gc.collect()
    assert len(locks) == 0


def test_hold_many_takes_every_lock():
    locks = DishLockRegistry()
    with locks.hold_many(1, ["Kheer", "Dal", "Dal"]):
        assert len(locks) == 2
        assert locks.lock_for(1, "Dal").locked()
        assert locks.lock_for(1, "Kheer").locked()
        assert not locks.lock_for(1, "Naan").locked()
    assert not locks.lock_for(1, "Dal").locked()


def test_same_dish_holders_never_overlap():
    locks = DishLockRegistry()
    inside = []
    overlaps = []

    def worker():
        with locks.hold(7, "Dal"):
            if inside:
                overlaps.append(True)
            inside.append(True)
            time.sleep(0.005)
            inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert overlaps == []
