"""Kitchen-floor operations: batch progress and live adjustments, one dish at a time."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from batch_engine.app import engine
from batch_engine.app.db.repository import StrategyRepository
from batch_engine.app.errors import AdjustmentDirectionViolation, StateViolationError, UnknownDishError
from batch_engine.app.metrics import ADJUSTMENTS
from batch_engine.app.schemas import (
    AdjustmentDirection,
    AdjustmentResult,
    BatchProgressState,
    DishProgress,
    KitchenDishView,
)
from batch_engine.layers.adjustment import DishLockRegistry, dish_locks, progress

logger = logging.getLogger(__name__)


def adjustment_alert(result: AdjustmentResult) -> str:
    changed = "reduced" if result.direction is AdjustmentDirection.REDUCE else "increased"
    s = result.strategy
    return (
        f"Remaining batches of {s.dish_name} {changed} by {result.percent_change}%: "
        f"batch 2 {result.previous_batch2_quantity}->{s.batch2_quantity}, "
        f"batch 3 {result.previous_batch3_quantity}->{s.batch3_quantity}"
    )


class KitchenService:
    """
    Reads and writes a dish's strategy and progress under that dish's lock, so
    two requests for the same dish never interleave their read-compute-write.
    """

    def __init__(self, db: Session, locks: Optional[DishLockRegistry] = None):
        self.db = db
        self.repo = StrategyRepository(db)
        self.locks = locks if locks is not None else dish_locks

    def record_progress(self, event_id: int, dish_name: str, state: BatchProgressState) -> DishProgress:
        with self.locks.hold(event_id, dish_name):
            strategy = self.repo.get_strategy(event_id, dish_name, for_update=True)
            if strategy is None:
                raise UnknownDishError(dish_name, event_id)
            current = self.repo.get_progress(event_id, dish_name)
            new_state = progress.advance(current, state, strategy.has_batch3)
            if new_state is not current:
                self.repo.set_progress(event_id, dish_name, new_state)
                self.db.commit()
                logger.info(
                    "%s -> %s",
                    current.value,
                    new_state.value,
                    extra={"event_id": event_id, "dish_name": dish_name},
                )
            return DishProgress(dish_name=dish_name, state=new_state)

    def adjust(
        self,
        event_id: int,
        dish_name: str,
        direction: AdjustmentDirection,
        observed_consumption: Optional[float] = None,
    ) -> AdjustmentResult:
        direction_label = getattr(direction, "value", str(direction))
        with self.locks.hold(event_id, dish_name):
            plan = self.repo.get_plan(event_id, dish_name, for_update=True)
            if plan is None:
                raise UnknownDishError(dish_name, event_id)
            record_id, strategy = plan
            state = self.repo.get_progress(event_id, dish_name)
            try:
                result = engine.adjust_batch(
                    dish_name,
                    direction,
                    strategy,
                    observed_consumption=observed_consumption,
                    progress_state=state,
                )
            except AdjustmentDirectionViolation:
                ADJUSTMENTS.labels(direction=direction_label, outcome="rejected").inc()
                self.db.rollback()
                raise

            try:
                self.repo.save_remaining_batches(event_id, record_id, strategy, result.strategy)
            except StateViolationError:
                ADJUSTMENTS.labels(direction=direction_label, outcome="stale").inc()
                self.db.rollback()
                raise
            self.repo.add_alert(event_id, adjustment_alert(result), dish_name=dish_name)
            self.db.commit()
        ADJUSTMENTS.labels(direction=direction_label, outcome="applied").inc()
        return result

    def kitchen_view(self, event_id: int) -> List[KitchenDishView]:
        states = self.repo.list_progress(event_id)
        views = []
        for strategy in self.repo.list_strategies(event_id):
            state = states.get(strategy.dish_name, BatchProgressState.NOT_STARTED)
            views.append(KitchenDishView(
                strategy=strategy,
                state=state,
                estimated_consumption_percent=progress.estimated_consumption_percent(state),
                next_action=progress.next_action(strategy, state),
                can_adjust=state in progress.ADJUSTABLE_STATES,
            ))
        return views
