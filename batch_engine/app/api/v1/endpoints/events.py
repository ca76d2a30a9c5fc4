"""Per-event strategy, kitchen progress and dashboard endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from batch_engine.app.db.session import get_db
from batch_engine.app.schemas import (
    AdjustBatchRequest,
    AdjustmentResult,
    BatchStrategy,
    BuildStrategiesRequest,
    DishProgress,
    EventDashboard,
    KitchenDishView,
    ProgressUpdateRequest,
)
from batch_engine.app.services.dashboard import DashboardService
from batch_engine.app.services.kitchen import KitchenService
from batch_engine.app.services.planning import PlanningService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/{event_id}/strategies", response_model=List[BatchStrategy])
def build_strategies(event_id: int, request: BuildStrategiesRequest, db: Session = Depends(get_db)):
    """
    Compute one batch strategy per approved dish and store it for the event.

    Replaces any strategy set the event already had and resets kitchen progress.
    """
    return PlanningService(db).rebuild(event_id, request.context, request.approved_menu)


@router.get("/{event_id}/strategies", response_model=List[BatchStrategy])
def list_strategies(event_id: int, db: Session = Depends(get_db)):
    return PlanningService(db).strategies(event_id)


@router.post("/{event_id}/dishes/{dish_name}/progress", response_model=DishProgress)
def record_progress(
    event_id: int,
    dish_name: str,
    request: ProgressUpdateRequest,
    db: Session = Depends(get_db),
):
    """Advance a dish's batch progress by exactly one step (re-sending the current state is a no-op)."""
    return KitchenService(db).record_progress(event_id, dish_name, request.state)


@router.post("/{event_id}/dishes/{dish_name}/adjust", response_model=AdjustmentResult)
def adjust_batch(
    event_id: int,
    dish_name: str,
    request: AdjustBatchRequest,
    db: Session = Depends(get_db),
):
    """
    Reduce or increase the batches of a dish that are not cooked yet.

    Needs batch 1 complete and batch 2 not complete. Without ``observedConsumption``
    the consumed portions are estimated from batch progress. A result that would
    move against the requested direction is rejected with 409.
    """
    result = KitchenService(db).adjust(event_id, dish_name, request.direction, request.observed_consumption)
    logger.info(
        "Adjustment applied",
        extra={
            "event_id": event_id,
            "dish_name": dish_name,
            "direction": result.direction.value,
            "consumption_rate": result.observation.consumption_rate,
            "multiplier": result.multiplier,
            "batch2_quantity": result.strategy.batch2_quantity,
            "batch3_quantity": result.strategy.batch3_quantity,
        },
    )
    return result


@router.get("/{event_id}/kitchen", response_model=List[KitchenDishView])
def kitchen_view(event_id: int, db: Session = Depends(get_db)):
    return KitchenService(db).kitchen_view(event_id)


@router.get("/{event_id}/dashboard", response_model=EventDashboard)
def dashboard(event_id: int, db: Session = Depends(get_db)):
    return DashboardService(db).dashboard(event_id)
