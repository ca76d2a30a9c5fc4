"""Portion estimation endpoints."""

import logging

from fastapi import APIRouter

from batch_engine.app import engine
from batch_engine.app.schemas import (
    CategoryPreview,
    CategoryPreviewRequest,
    EstimatePortionsRequest,
    EstimatePortionsResponse,
)
from batch_engine.layers import portions

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/estimate", response_model=EstimatePortionsResponse)
def estimate_portions(request: EstimatePortionsRequest):
    """
    Fill in estimated portions for each menu item.

    Portions per dish = round(guests x category ratio / dishes in the category).
    Items flagged ``isManuallyEdited`` are returned unchanged.
    """
    items = engine.estimate_portions(request.guest_count, request.items)
    logger.info("Estimated portions for %d items (%d guests)", len(items), request.guest_count)
    return EstimatePortionsResponse(items=items)


@router.post("/preview", response_model=CategoryPreview)
def preview_category(request: CategoryPreviewRequest):
    """Preview what each dish in a category gets for a given dish count."""
    return portions.preview_category(request.guest_count, request.category, request.dish_count)
