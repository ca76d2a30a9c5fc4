"""Build and store an event's strategy set."""

import logging
from typing import Any, Iterable, List, Optional

from sqlalchemy.orm import Session

from batch_engine.app import engine
from batch_engine.app.db.repository import StrategyRepository
from batch_engine.app.metrics import STRATEGIES_BUILT
from batch_engine.app.schemas import BatchStrategy
from batch_engine.layers.adjustment import DishLockRegistry, dish_locks

logger = logging.getLogger(__name__)


class PlanningService:
    """Runs buildStrategies and replaces whatever the event had before."""

    def __init__(self, db: Session, locks: Optional[DishLockRegistry] = None):
        self.db = db
        self.repo = StrategyRepository(db)
        self.locks = locks if locks is not None else dish_locks

    def rebuild(self, event_id: int, context: Any, approved_menu: Iterable[Any]) -> List[BatchStrategy]:
        """
        Compute and store a new strategy set for the event.

        The swap happens under the locks of every dish the event had and every
        dish it will have, so it never lands between an adjustment's read and
        its write.
        """
        strategies = engine.build_strategies(context, approved_menu)
        dishes = set(self.repo.dish_names(event_id)) | {s.dish_name for s in strategies}
        with self.locks.hold_many(event_id, dishes):
            self.repo.replace_strategies(event_id, strategies)
            self.repo.add_alert(event_id, f"Batch strategies built for {len(strategies)} dishes")
            self.db.commit()
        STRATEGIES_BUILT.inc(len(strategies))
        logger.info("Stored %d strategies", len(strategies), extra={"event_id": event_id})
        return strategies

    def strategies(self, event_id: int) -> List[BatchStrategy]:
        return self.repo.list_strategies(event_id)
