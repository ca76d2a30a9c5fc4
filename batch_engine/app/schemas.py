"""Value shapes shared by the layers, the engine and the HTTP API.

Python attributes are snake_case; the wire shape uses camelCase aliases
(``dishName``, ``batch1Quantity``...). Both spellings are accepted on input.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    model_config = ConfigDict(alias_generator=_camel, populate_by_name=True)


# --- Enumerations ---

class DishCategory(str, Enum):
    VEG_STARTER = "VegStarter"
    NON_VEG_STARTER = "NonVegStarter"
    MAIN_COURSE = "MainCourse"
    DESSERT = "Dessert"
    DRINKS = "Drinks"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Weather(str, Enum):
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"


class MealTime(str, Enum):
    LUNCH = "lunch"
    DINNER = "dinner"


class EventType(str, Enum):
    WEDDING = "wedding"
    CORPORATE = "corporate"
    SCHOOL_FUNCTION = "schoolFunction"
    BIRTHDAY = "birthday"


class DietaryRequirement(str, Enum):
    VEGAN = "vegan"
    JAIN = "jain"
    GLUTEN_FREE = "glutenFree"


class AdjustmentDirection(str, Enum):
    REDUCE = "reduce"
    INCREASE = "increase"


class BatchProgressState(str, Enum):
    """Forward-only kitchen progress of a single dish."""

    NOT_STARTED = "NotStarted"
    BATCH1_COMPLETE = "Batch1Complete"
    BATCH2_STARTED = "Batch2Started"
    BATCH2_COMPLETE = "Batch2Complete"
    BATCH3_STARTED = "Batch3Started"
    DONE = "Done"


# --- Core inputs ---

class MenuItem(CamelModel):
    """A dish on the approved menu."""

    name: str = Field(..., min_length=1)
    category: DishCategory
    estimated_portions: int = Field(0, ge=0)
    approved_portions: Optional[int] = Field(None, ge=0)
    is_manually_edited: bool = False

    @property
    def planned_portions(self) -> int:
        """Portions to plan for: the approved count when set, else the estimate."""
        if self.approved_portions is not None:
            return self.approved_portions
        return self.estimated_portions


class EventContext(CamelModel):
    """Immutable event parameters consumed by the engine."""

    model_config = ConfigDict(alias_generator=_camel, populate_by_name=True, frozen=True)

    guest_count: int
    adult_percentage: int = Field(100, ge=0, le=100)
    kid_percentage: int = Field(0, ge=0, le=100)
    weather: Weather = Weather.CLOUDY
    temperature: int = 25
    meal_time: MealTime = MealTime.LUNCH
    event_type: EventType = EventType.CORPORATE
    dietary_requirements: FrozenSet[DietaryRequirement] = frozenset()


# --- Engine outputs ---

class BatchStrategy(CamelModel):
    """Per-dish cooking plan. batch3_quantity == 0 means a two-batch plan."""

    dish_name: str
    dish_category: DishCategory
    total_portions: int = Field(..., ge=0)
    batch1_quantity: int = Field(..., ge=0)
    batch2_quantity: int = Field(..., ge=0)
    batch3_quantity: int = Field(0, ge=0)
    batch1_start_time: str
    batch2_timing: str
    trigger_condition: str
    risk_level: RiskLevel
    risk_score: int = Field(..., ge=0, le=100)
    adjustment_strategy: str
    cooking_timing_suggestion: str

    @property
    def has_batch3(self) -> bool:
        return self.batch3_quantity > 0

    @property
    def scheduled_portions(self) -> int:
        return self.batch1_quantity + self.batch2_quantity + self.batch3_quantity


class RiskAssessment(CamelModel):
    risk_score: int = Field(..., ge=0, le=100)
    risk_level: RiskLevel
    factors: Dict[str, int] = Field(default_factory=dict)


class ConsumptionObservation(CamelModel):
    """Derived each time an operator reports progress; never persisted."""

    consumed_portions: float = Field(..., ge=0)
    consumption_rate: float = Field(..., ge=0)


class AdjustmentResult(CamelModel):
    strategy: BatchStrategy
    observation: ConsumptionObservation
    direction: AdjustmentDirection
    multiplier: float
    percent_change: int
    previous_batch2_quantity: int
    previous_batch3_quantity: int


class CategoryPreview(CamelModel):
    category: DishCategory
    total_servings: int
    portions_per_dish: int
    is_reasonable: bool
    formula: str


# --- Kitchen and dashboard read models ---

class DishProgress(CamelModel):
    dish_name: str
    state: BatchProgressState


class KitchenDishView(CamelModel):
    strategy: BatchStrategy
    state: BatchProgressState
    estimated_consumption_percent: int
    next_action: str
    can_adjust: bool


class HighRiskNote(CamelModel):
    dish_name: str
    cooking_timing_suggestion: str


class StrategySummary(CamelModel):
    total_dishes: int
    total_portions: int
    high_risk_count: int
    medium_risk_count: int
    low_risk_count: int
    estimated_waste_reduction_percent: int
    high_risk_dishes: List[HighRiskNote] = Field(default_factory=list)


class EventDashboard(CamelModel):
    event_id: int
    summary: StrategySummary
    strategies: List[BatchStrategy]
    alerts: List[str] = Field(default_factory=list)


# --- API request/response bodies ---

class EstimatePortionsRequest(CamelModel):
    guest_count: int
    items: List[MenuItem]


class EstimatePortionsResponse(CamelModel):
    items: List[MenuItem]


class CategoryPreviewRequest(CamelModel):
    guest_count: int
    category: DishCategory
    dish_count: int = Field(..., ge=0)


class ClassifyRiskRequest(CamelModel):
    dish: MenuItem
    total_portions: int = Field(..., ge=0)
    context: EventContext


class BuildStrategiesRequest(CamelModel):
    context: EventContext
    approved_menu: List[MenuItem]


class AdjustBatchRequest(CamelModel):
    direction: AdjustmentDirection
    observed_consumption: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Portions consumed so far; estimated from batch progress when omitted",
    )


class ProgressUpdateRequest(CamelModel):
    state: BatchProgressState
