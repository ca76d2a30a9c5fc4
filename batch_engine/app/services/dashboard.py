"""Event dashboard: risk mix of the strategy set and the live alert feed."""

from typing import List

from sqlalchemy.orm import Session

from batch_engine.app.db.repository import StrategyRepository
from batch_engine.app.schemas import (
    BatchStrategy,
    EventDashboard,
    HighRiskNote,
    RiskLevel,
    StrategySummary,
)

# Expected waste reduction (percent) credited to batch cooking per risk level
WASTE_REDUCTION_WEIGHTS = {
    RiskLevel.HIGH: 15,
    RiskLevel.MEDIUM: 8,
    RiskLevel.LOW: 3,
}


def summarize(strategies: List[BatchStrategy]) -> StrategySummary:
    counts = {level: 0 for level in RiskLevel}
    for strategy in strategies:
        counts[strategy.risk_level] += 1

    total = len(strategies)
    if total:
        weighted = sum(WASTE_REDUCTION_WEIGHTS[level] * n for level, n in counts.items())
        reduction = round(weighted / total)
    else:
        reduction = 0

    return StrategySummary(
        total_dishes=total,
        total_portions=sum(s.total_portions for s in strategies),
        high_risk_count=counts[RiskLevel.HIGH],
        medium_risk_count=counts[RiskLevel.MEDIUM],
        low_risk_count=counts[RiskLevel.LOW],
        estimated_waste_reduction_percent=reduction,
        high_risk_dishes=[
            HighRiskNote(dish_name=s.dish_name, cooking_timing_suggestion=s.cooking_timing_suggestion)
            for s in strategies
            if s.risk_level is RiskLevel.HIGH
        ],
    )


class DashboardService:
    def __init__(self, db: Session):
        self.repo = StrategyRepository(db)

    def dashboard(self, event_id: int) -> EventDashboard:
        strategies = self.repo.list_strategies(event_id)
        return EventDashboard(
            event_id=event_id,
            summary=summarize(strategies),
            strategies=strategies,
            alerts=self.repo.list_alerts(event_id),
        )
