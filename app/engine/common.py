"""Numeric helpers shared by the calculators."""

import math
import statistics
from typing import Sequence


def clamp_score(value: float) -> float:
    """Clamp a score into [0, 100]."""
    return max(0.0, min(100.0, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def population_stdev(values: Sequence[float]) -> float:
    """Population standard deviation; 0 for an empty sequence."""
    if not values:
        return 0.0
    return statistics.pstdev(values)
