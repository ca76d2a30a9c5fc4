"""API v1 package."""

from fastapi import APIRouter

from batch_engine.app.api.v1.endpoints import events, portions, risk

api_router = APIRouter()

api_router.include_router(portions.router, prefix="/portions", tags=["Portions"])
api_router.include_router(risk.router, prefix="/risk", tags=["Risk"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
