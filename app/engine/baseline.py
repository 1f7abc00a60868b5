"""
Rolling personal baseline.

A baseline is the mean and population standard deviation of one metric
over a trailing window of days **before** the day being scored.  The
scored day is always excluded by date equality, even when the caller's
history already contains it.

History is expected in chronological order; the window is selected by
date, so ordering only matters to callers that slice history themselves.
"""

from __future__ import annotations

import datetime
import statistics
from typing import Callable, Iterable, Optional

from pydantic import BaseModel, Field

from app.schemas.physio import DailyBiometric


class Baseline(BaseModel):
    """Trailing-window statistics for one metric."""

    mean: float
    spread: float = Field(..., ge=0.0, description="Population standard deviation")
    sample_count: int = Field(..., ge=0)


def baseline_values(
    history: Iterable[DailyBiometric],
    today: datetime.date,
    extract: Callable[[DailyBiometric], Optional[float]],
    window_days: int,
) -> list[float]:
    """Collect the metric values that fall inside the trailing window.

    Only entries dated in ``[today - window_days, today)`` contribute;
    entries without a value for the metric are skipped.
    """
    window_start = today - datetime.timedelta(days=window_days)
    values: list[float] = []
    for entry in history:
        if entry.date >= today or entry.date < window_start:
            continue
        value = extract(entry)
        if value is None:
            continue
        values.append(float(value))
    return values


def compute_baseline(
    history: Iterable[DailyBiometric],
    today: datetime.date,
    extract: Callable[[DailyBiometric], Optional[float]],
    window_days: int = 30,
    min_samples: int = 5,
) -> Optional[Baseline]:
    """Compute the trailing baseline, or ``None`` if history is too thin."""
    values = baseline_values(history, today, extract, window_days)
    if len(values) < max(min_samples, 1):
        return None
    return Baseline(
        mean=statistics.fmean(values),
        spread=statistics.pstdev(values),
        sample_count=len(values),
    )
