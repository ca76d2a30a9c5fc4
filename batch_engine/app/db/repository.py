"""Conversion between stored records and engine value shapes. Callers own the transaction."""

from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from batch_engine.app.db.models import BatchProgressRecord, BatchStrategyRecord, EventAlertRecord
from batch_engine.app.errors import StateViolationError
from batch_engine.app.schemas import BatchProgressState, BatchStrategy

_STRATEGY_FIELDS = [name for name in BatchStrategy.model_fields]


def _to_schema(record: BatchStrategyRecord) -> BatchStrategy:
    return BatchStrategy.model_validate({name: getattr(record, name) for name in _STRATEGY_FIELDS})


class StrategyRepository:
    """Strategies, batch progress and alerts of events, keyed by (event_id, dish_name)."""

    def __init__(self, db: Session):
        self.db = db

    # --- strategies ---

    def replace_strategies(self, event_id: int, strategies: List[BatchStrategy]) -> None:
        """Drop the event's previous strategy set and progress, then store ``strategies``."""
        self.db.query(BatchStrategyRecord).filter(
            BatchStrategyRecord.event_id == event_id
        ).delete(synchronize_session="fetch")
        self.db.query(BatchProgressRecord).filter(
            BatchProgressRecord.event_id == event_id
        ).delete(synchronize_session="fetch")
        for position, strategy in enumerate(strategies):
            data = strategy.model_dump()
            data["dish_category"] = strategy.dish_category.value
            data["risk_level"] = strategy.risk_level.value
            self.db.add(BatchStrategyRecord(event_id=event_id, position=position, **data))
            self.db.add(BatchProgressRecord(
                event_id=event_id,
                dish_name=strategy.dish_name,
                state=BatchProgressState.NOT_STARTED.value,
            ))
        self.db.flush()

    def list_strategies(self, event_id: int) -> List[BatchStrategy]:
        rows = self.db.query(BatchStrategyRecord).filter(
            BatchStrategyRecord.event_id == event_id
        ).order_by(BatchStrategyRecord.position).all()
        return [_to_schema(row) for row in rows]

    def _strategy_record(self, event_id: int, dish_name: str, for_update: bool = False) -> Optional[BatchStrategyRecord]:
        query = self.db.query(BatchStrategyRecord).filter(
            BatchStrategyRecord.event_id == event_id,
            BatchStrategyRecord.dish_name == dish_name,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_strategy(self, event_id: int, dish_name: str, for_update: bool = False) -> Optional[BatchStrategy]:
        record = self._strategy_record(event_id, dish_name, for_update=for_update)
        return _to_schema(record) if record is not None else None

    def get_plan(self, event_id: int, dish_name: str, for_update: bool = False) -> Optional[Tuple[int, BatchStrategy]]:
        """(record id, strategy) of a dish. The id names this particular build of the plan."""
        record = self._strategy_record(event_id, dish_name, for_update=for_update)
        return (record.id, _to_schema(record)) if record is not None else None

    def dish_names(self, event_id: int) -> List[str]:
        rows = self.db.query(BatchStrategyRecord.dish_name).filter(BatchStrategyRecord.event_id == event_id).all()
        return [row.dish_name for row in rows]

    def save_remaining_batches(self, event_id: int, record_id: int, read: BatchStrategy, adjusted: BatchStrategy) -> None:
        """
        Persist batch 2/3 of an adjusted strategy over the exact plan it was computed from.

        Compare-and-set on the record id and the batch quantities that were read:
        if the plan was rebuilt or adjusted in between, nothing is written and
        StateViolationError is raised. Nothing else changes after creation.
        """
        updated = self.db.query(BatchStrategyRecord).filter(
            BatchStrategyRecord.id == record_id,
            BatchStrategyRecord.event_id == event_id,
            BatchStrategyRecord.batch2_quantity == read.batch2_quantity,
            BatchStrategyRecord.batch3_quantity == read.batch3_quantity,
        ).update(
            {
                BatchStrategyRecord.batch2_quantity: adjusted.batch2_quantity,
                BatchStrategyRecord.batch3_quantity: adjusted.batch3_quantity,
            },
            synchronize_session="fetch",
        )
        if updated != 1:
            raise StateViolationError(
                f"the plan of '{read.dish_name}' changed while it was being adjusted; retry on the current plan",
                dish_name=read.dish_name,
                event_id=event_id,
            )

    # --- progress ---

    def _progress_record(self, event_id: int, dish_name: str) -> Optional[BatchProgressRecord]:
        return self.db.query(BatchProgressRecord).filter(
            BatchProgressRecord.event_id == event_id,
            BatchProgressRecord.dish_name == dish_name,
        ).first()

    def get_progress(self, event_id: int, dish_name: str) -> BatchProgressState:
        record = self._progress_record(event_id, dish_name)
        if record is None:
            return BatchProgressState.NOT_STARTED
        return BatchProgressState(record.state)

    def list_progress(self, event_id: int) -> Dict[str, BatchProgressState]:
        rows = self.db.query(BatchProgressRecord).filter(BatchProgressRecord.event_id == event_id).all()
        return {row.dish_name: BatchProgressState(row.state) for row in rows}

    def set_progress(self, event_id: int, dish_name: str, state: BatchProgressState) -> None:
        record = self._progress_record(event_id, dish_name)
        if record is None:
            self.db.add(BatchProgressRecord(event_id=event_id, dish_name=dish_name, state=state.value))
        else:
            record.state = state.value
        self.db.flush()

    # --- alerts ---

    def add_alert(self, event_id: int, message: str, dish_name: Optional[str] = None) -> None:
        self.db.add(EventAlertRecord(event_id=event_id, dish_name=dish_name, message=message))
        self.db.flush()

    def list_alerts(self, event_id: int) -> List[str]:
        rows = self.db.query(EventAlertRecord).filter(
            EventAlertRecord.event_id == event_id
        ).order_by(EventAlertRecord.id).all()
        return [row.message for row in rows]
