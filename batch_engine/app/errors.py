"""Domain error types. Raised by the engine and layers, rendered by the HTTP handlers in main."""

from typing import Any, Dict, Optional

from fastapi import status


class BatchEngineError(Exception):
    """Base class for every error the engine reports to its caller."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "batch_engine_error"

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra: Dict[str, Any] = extra

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.code, "detail": self.message}
        body.update(self.extra)
        return body


class InvalidInputError(BatchEngineError):
    """Non-positive guest count, empty menu, malformed category or similar."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "invalid_input"


class UnknownDishError(BatchEngineError):
    """Adjustment or progress update for a dish with no batch strategy."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "unknown_dish"

    def __init__(self, dish_name: str, event_id: Optional[int] = None):
        where = f" for event {event_id}" if event_id is not None else ""
        super().__init__(f"No batch strategy for dish '{dish_name}'{where}", dish_name=dish_name)
        self.dish_name = dish_name


class StateViolationError(BatchEngineError):
    """Batch-progress state does not allow the requested operation."""

    status_code = status.HTTP_409_CONFLICT
    code = "state_violation"


class AdjustmentDirectionViolation(BatchEngineError):
    """An adjustment would move batch quantities against the requested direction.

    Always rejected. Carries the attempted and previous values so a
    miscalibrated multiplier table can be diagnosed.
    """

    status_code = status.HTTP_409_CONFLICT
    code = "adjustment_direction_violation"

    def __init__(
        self,
        dish_name: str,
        direction: str,
        multiplier: float,
        old_batch2: int,
        attempted_batch2: int,
        old_batch3: int,
        attempted_batch3: int,
    ):
        expected = "below" if direction == "reduce" else "above"
        super().__init__(
            f"{direction} on '{dish_name}' produced batch 2 {old_batch2}->{attempted_batch2} "
            f"(x{multiplier}); expected a value {expected} {old_batch2}",
            dish_name=dish_name,
            direction=direction,
            multiplier=multiplier,
            old_batch2=old_batch2,
            attempted_batch2=attempted_batch2,
            old_batch3=old_batch3,
            attempted_batch3=attempted_batch3,
        )
        self.dish_name = dish_name
        self.direction = direction
        self.multiplier = multiplier
        self.old_batch2 = old_batch2
        self.attempted_batch2 = attempted_batch2
        self.old_batch3 = old_batch3
        self.attempted_batch3 = attempted_batch3
