"""
Training load — ACWR (Acute:Chronic Workload Ratio) and consistency.

Load is measured as **moving time in minutes**.  Two dimensions are
derived from the activity history:

ACWR
----
- acute load   = minutes in the 7 calendar days ending on ``as_of``
  (``[as_of - 6d, as_of + 1d)``)
- chronic load = minutes in the 42 calendar days ending on ``as_of``,
  divided by 6 (a weekly rate)
- ratio        = acute / chronic when chronic exceeds 10 minutes;
  2.0 when there is no chronic base but the athlete is active (a spike
  by definition); 1.0 when there is no data at all.

Zones, checked in this order:

    [1.10, 1.30]  -> 100  Perfect Growth Zone
    [0.95, 1.10)  ->  85  Maintenance Mode
    (1.30, 1.45]  ->  80  Aggressive Build
    < 0.95        ->  60  Detraining Risk
    > 1.45        ->  50  Danger Zone

Consistency
-----------
Distinct active days are counted in each of the trailing 8 weekly
buckets (7-day windows ending at ``as_of`` and stepping back).  The
population standard deviation of those counts is banded:

    < 0.5       -> 100
    [0.5, 1.0)  ->  85
    [1.0, 1.5]  ->  70
    > 1.5       ->  50

The trend compares the spread of the 4 most recent weeks to the older 4.

Empty histories are not errors: ACWR resolves to ratio 1.0 (Maintenance
Mode, 85) and consistency to stddev 0 (100), both flagged
``is_fallback`` so the display layer can show "no data".
"""

from __future__ import annotations

import datetime
from typing import Optional, Sequence, Union

from pydantic import BaseModel, Field

from app.core.instrumentation import ScoringObserver, notify
from app.engine.common import population_stdev
from app.schemas.activity import ActivityRecord
from app.schemas.scores import DimensionComponent, DimensionDetail, DimensionTrend

# ======================================================================
# Configuration
# ======================================================================


class LoadConfig(BaseModel):
    """Configuration for the load and consistency computations."""

    acute_days: int = Field(7, ge=1, le=28)
    chronic_days: int = Field(42, ge=7, le=84)
    min_chronic_minutes: float = Field(
        10.0, ge=0.0,
        description="Chronic weekly minutes required for a real ratio",
    )
    no_base_ratio: float = Field(2.0, description="Ratio used when active without a chronic base")
    neutral_ratio: float = Field(1.0, description="Ratio used when there is no data")
    consistency_weeks: int = Field(8, ge=2, le=52)

    @property
    def chronic_weeks(self) -> float:
        return self.chronic_days / 7.0


DEFAULT_LOAD_CONFIG = LoadConfig()

# (score, low, high, low_inclusive, high_inclusive, suggestion), first match wins.
_ACWR_ZONES: list[tuple[int, float, float, bool, bool, str]] = [
    (100, 1.10, 1.30, True, True,
     "Perfect Growth Zone (1.1 - 1.3). You are building fitness."),
    (85, 0.95, 1.10, True, False,
     "Maintenance Mode (0.95 - 1.1). Push volume slightly to grow."),
    (80, 1.30, 1.45, False, True,
     "Aggressive Build (1.3 - 1.45). Watch for fatigue."),
    (60, float("-inf"), 0.95, True, False,
     "Detraining Risk (< 0.95). Increase training volume."),
    (50, 1.45, float("inf"), False, True,
     "Danger Zone (> 1.45). Too much too soon! Back off."),
]

# (score, upper bound, upper inclusive, suggestion), first match wins.
_CONSISTENCY_BANDS: list[tuple[int, float, bool, str]] = [
    (100, 0.5, False, "Machine-like Consistency! (< 0.5)"),
    (85, 1.0, False, "Good Consistency (< 1.0). Don't miss sessions."),
    (70, 1.5, True, "Variable Schedule. Try to lock in your days."),
    (50, float("inf"), True, "Erratic (> 1.5). Establish a routine."),
]

DateLike = Union[datetime.date, datetime.datetime]


# ======================================================================
# Windowing helpers
# ======================================================================


def as_day(value: DateLike) -> datetime.date:
    """Normalise a date or datetime to a calendar date."""
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def minutes_between(
    activities: Sequence[ActivityRecord],
    start: datetime.date,
    end: datetime.date,
) -> float:
    """Sum moving minutes for activities dated in ``[start, end)``."""
    return sum(a.moving_minutes for a in activities if start <= a.day < end)


def weekly_buckets(
    activities: Sequence[ActivityRecord],
    as_of: datetime.date,
    weeks: int,
) -> list[list[ActivityRecord]]:
    """Split activities into trailing 7-day buckets, most recent first.

    Bucket ``i`` covers ``[as_of - 7i - 6, as_of - 7i]``.
    """
    buckets: list[list[ActivityRecord]] = []
    for i in range(weeks):
        end = as_of - datetime.timedelta(days=7 * i) + datetime.timedelta(days=1)
        start = end - datetime.timedelta(days=7)
        buckets.append([a for a in activities if start <= a.day < end])
    return buckets


# ======================================================================
# ACWR
# ======================================================================


def compute_ratio(acute: float, chronic: float, cfg: LoadConfig = DEFAULT_LOAD_CONFIG) -> float:
    """Acute:chronic ratio with the no-base and no-data policies."""
    if chronic > cfg.min_chronic_minutes:
        return acute / chronic
    if acute > 0:
        return cfg.no_base_ratio
    return cfg.neutral_ratio


def classify_acwr(ratio: float) -> tuple[int, str]:
    """Map a ratio to ``(score, suggestion)``."""
    for score, low, high, low_inc, high_inc, suggestion in _ACWR_ZONES:
        above_low = ratio >= low if low_inc else ratio > low
        below_high = ratio <= high if high_inc else ratio < high
        if above_low and below_high:
            return score, suggestion
    # Only NaN reaches this point.
    return _ACWR_ZONES[-1][0], _ACWR_ZONES[-1][5]


def acwr_trend(ratio: float) -> DimensionTrend:
    if ratio > 1.05:
        return "improving"
    if ratio < 0.95:
        return "declining"
    return "stable"


def compute_load(
    activities: Sequence[ActivityRecord],
    as_of: DateLike,
    config: Optional[LoadConfig] = None,
    observer: Optional[ScoringObserver] = None,
) -> DimensionDetail:
    """Score the acute:chronic workload ratio.

    Args:
        activities: Activity history (any order).
        as_of: Reference date, the last day of both windows.
        config: Optional :class:`LoadConfig` override.
        observer: Optional instrumentation hook.

    Returns:
        :class:`DimensionDetail` for the load dimension.
    """
    cfg = config or DEFAULT_LOAD_CONFIG
    day = as_day(as_of)
    end = day + datetime.timedelta(days=1)

    acute_start = end - datetime.timedelta(days=cfg.acute_days)
    acute = minutes_between(activities, acute_start, end)

    chronic_start = end - datetime.timedelta(days=cfg.chronic_days)
    chronic_total = minutes_between(activities, chronic_start, end)
    chronic = chronic_total / cfg.chronic_weeks

    ratio = compute_ratio(acute, chronic, cfg)
    score, suggestion = classify_acwr(ratio)
    is_fallback = acute == 0 and chronic_total == 0

    notify(observer, "load", {
        "as_of": day.isoformat(),
        "acute_minutes": acute,
        "chronic_weekly_minutes": chronic,
        "ratio": ratio,
        "score": score,
    })

    return DimensionDetail(
        score=score,
        components=[
            DimensionComponent(name="Acute Load (7d)", display_value=f"{round(acute)} mins"),
            DimensionComponent(name="Chronic Load (42d)", display_value=f"{round(chronic)} mins"),
            DimensionComponent(name="A:C Ratio", display_value=f"{ratio:.2f}", contribution=score),
        ],
        trend=acwr_trend(ratio),
        suggestion=suggestion,
        metrics={"acute_minutes": acute, "chronic_minutes": chronic, "ratio": ratio},
        is_fallback=is_fallback,
    )


# ======================================================================
# Consistency
# ======================================================================


def active_days_per_week(
    activities: Sequence[ActivityRecord],
    as_of: DateLike,
    weeks: int = 8,
) -> list[int]:
    """Distinct active calendar days per trailing week, most recent first."""
    return [
        len({a.day for a in bucket})
        for bucket in weekly_buckets(activities, as_day(as_of), weeks)
    ]


def classify_consistency(stdev: float) -> tuple[int, str]:
    """Map a weekly-count spread to ``(score, suggestion)``."""
    for score, high, high_inc, suggestion in _CONSISTENCY_BANDS:
        if (stdev <= high) if high_inc else (stdev < high):
            return score, suggestion
    return _CONSISTENCY_BANDS[-1][0], _CONSISTENCY_BANDS[-1][3]


def consistency_trend(weekly_counts: Sequence[int]) -> DimensionTrend:
    """Compare the spread of the recent half with the older half."""
    half = len(weekly_counts) // 2
    recent = population_stdev(weekly_counts[:half])
    older = population_stdev(weekly_counts[half:])
    if recent < older:
        return "improving"
    if recent > older:
        return "declining"
    return "stable"


def compute_consistency(
    activities: Sequence[ActivityRecord],
    as_of: DateLike,
    config: Optional[LoadConfig] = None,
    observer: Optional[ScoringObserver] = None,
) -> DimensionDetail:
    """Score how steady the weekly training rhythm is.

    Args:
        activities: Activity history (any order).
        as_of: Reference date, the last day of the most recent week.
        config: Optional :class:`LoadConfig` override.
        observer: Optional instrumentation hook.

    Returns:
        :class:`DimensionDetail` for the consistency dimension.
    """
    cfg = config or DEFAULT_LOAD_CONFIG
    counts = active_days_per_week(activities, as_of, cfg.consistency_weeks)

    mean = sum(counts) / len(counts)
    stdev = population_stdev(counts)
    score, suggestion = classify_consistency(stdev)

    notify(observer, "consistency", {
        "as_of": as_day(as_of).isoformat(),
        "weekly_active_days": counts,
        "mean": mean,
        "stdev": stdev,
        "score": score,
    })

    return DimensionDetail(
        score=score,
        components=[
            DimensionComponent(name="Avg Days/Week", display_value=f"{mean:.1f}"),
            DimensionComponent(name="Variability", display_value=f"±{stdev:.1f} days", contribution=score),
        ],
        trend=consistency_trend(counts),
        suggestion=suggestion,
        metrics={"mean": mean, "stdev": stdev},
        is_fallback=sum(counts) == 0,
    )
