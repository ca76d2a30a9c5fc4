"""Risk classification endpoint (inspection and testing)."""

from fastapi import APIRouter

from batch_engine.app import engine
from batch_engine.app.schemas import ClassifyRiskRequest, RiskAssessment

router = APIRouter()


@router.post("/classify", response_model=RiskAssessment)
def classify_risk(request: ClassifyRiskRequest):
    return engine.classify_risk(request.dish, request.total_portions, request.context)
