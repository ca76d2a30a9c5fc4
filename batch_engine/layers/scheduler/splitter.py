"""Partition total portions into sequential batches."""

from __future__ import annotations

from batch_engine.app.schemas import RiskLevel
from batch_engine.layers.rounding import round_half_up

from .config import BATCH_SPLITS


def split(total_portions: int, risk_level: RiskLevel) -> tuple[int, int, int]:
    """
    Return (batch1, batch2, batch3) summing exactly to ``total_portions``.

    Batches 2 and 3 are rounded half up from their shares; batch 1 takes the
    remainder.
    Low risk yields a two-batch plan (batch3 == 0).
    """
    if total_portions < 0:
        raise ValueError(f"total_portions must be >= 0, got {total_portions}")
    _, share2, share3 = BATCH_SPLITS[RiskLevel(risk_level)]
    batch2 = round_half_up(total_portions * share2)
    batch3 = round_half_up(total_portions * share3)
    batch1 = total_portions - batch2 - batch3
    return batch1, batch2, batch3
