"""Portion rounding shared by every stage."""

import math


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounding up (42.5 -> 43), unlike round()'s half-to-even."""
    return math.floor(value + 0.5)
