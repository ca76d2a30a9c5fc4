"""
Per-dish batch progress: the forward-only state machine, consumption estimates
derived from it, and next-action advice for the kitchen floor.
"""
from __future__ import annotations

from batch_engine.app.errors import StateViolationError
from batch_engine.app.schemas import BatchProgressState as State
from batch_engine.app.schemas import BatchStrategy
from batch_engine.layers.scheduler import guidance

from . import config as cfg

_THREE_BATCH_ORDER = [
    State.NOT_STARTED,
    State.BATCH1_COMPLETE,
    State.BATCH2_STARTED,
    State.BATCH2_COMPLETE,
    State.BATCH3_STARTED,
    State.DONE,
]
_TWO_BATCH_ORDER = [s for s in _THREE_BATCH_ORDER if s is not State.BATCH3_STARTED]

ADJUSTABLE_STATES = frozenset({State.BATCH1_COMPLETE, State.BATCH2_STARTED})


def _order(has_batch3: bool) -> list[State]:
    return _THREE_BATCH_ORDER if has_batch3 else _TWO_BATCH_ORDER


def next_state(current: State, has_batch3: bool) -> State | None:
    order = _order(has_batch3)
    idx = order.index(State(current))
    return order[idx + 1] if idx + 1 < len(order) else None


def advance(current: State, target: State, has_batch3: bool) -> State:
    """
    Move to ``target`` if it is the immediate successor of ``current``.

    Re-reporting the current state is a no-op. Anything else (skipping a
    step, going back, batch 3 on a two-batch plan) is a StateViolationError.
    """
    current, target = State(current), State(target)
    if target is current:
        return current
    expected = next_state(current, has_batch3)
    if target is not expected:
        raise StateViolationError(
            f"cannot move from {current.value} to {target.value}",
            current_state=current.value,
            requested_state=target.value,
            allowed_state=expected.value if expected else None,
        )
    return target


def ensure_adjustable(state: State, dish_name: str) -> None:
    """Adjustments need batch 1 complete and batch 2 not yet complete."""
    state = State(state)
    if state is State.NOT_STARTED:
        raise StateViolationError(
            f"batch 1 of '{dish_name}' is not complete yet",
            dish_name=dish_name,
            current_state=state.value,
        )
    if state not in ADJUSTABLE_STATES:
        raise StateViolationError(
            f"batch 2 of '{dish_name}' is already complete; nothing left to adjust",
            dish_name=dish_name,
            current_state=state.value,
        )


def estimate_consumed_portions(strategy: BatchStrategy, state: State) -> float:
    """Rough consumed-portion count when the operator gives no number."""
    state = State(state)
    batch1 = strategy.batch1_quantity
    if state is State.NOT_STARTED:
        return batch1 * cfg.CONSUMED_SHARE_BEFORE_BATCH1_DONE
    if state in ADJUSTABLE_STATES:
        return batch1 * cfg.CONSUMED_SHARE_OF_CURRENT_BATCH
    return batch1 + strategy.batch2_quantity * cfg.CONSUMED_SHARE_OF_CURRENT_BATCH


def estimated_consumption_percent(state: State) -> int:
    return cfg.ESTIMATED_CONSUMPTION_PERCENT[State(state)]


def next_action(strategy: BatchStrategy, state: State, consumption_percent: int | None = None) -> str:
    state = State(state)
    if consumption_percent is None:
        consumption_percent = estimated_consumption_percent(state)

    if state is State.NOT_STARTED:
        return "Complete Batch 1 first"
    if state is State.BATCH1_COMPLETE:
        trigger = guidance.batch2_trigger_percent(strategy.dish_category, strategy.risk_level)
        if consumption_percent >= trigger:
            return "Start Batch 2 now!"
        if consumption_percent < cfg.WAIT_BELOW_PERCENT:
            return f"Wait {cfg.WAIT_MINUTES} minutes before starting Batch 2"
        return "Monitor consumption and adjust as needed"
    if state is State.BATCH2_STARTED:
        return "Batch 2 in progress"
    if state is State.BATCH2_COMPLETE and strategy.has_batch3:
        if consumption_percent >= cfg.BATCH3_GO_PERCENT:
            return "Start Batch 3 if needed"
        return "Hold Batch 3 - monitor consumption"
    if state is State.BATCH3_STARTED:
        return "Batch 3 in progress"
    if state is State.DONE:
        return "All batches cooked"
    return "Monitor consumption and adjust as needed"
