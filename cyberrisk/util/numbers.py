"""Numeric helpers shared by the scoring and pricing code."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up (12.5 -> 13, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
