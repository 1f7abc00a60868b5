"""
Training profile — five activity-derived dimensions and an overall score.

Besides load and consistency (:mod:`app.engine.load`), three dimensions
read the most recent training week against the four weeks before it:

- **endurance** — longest session this week vs. the mean weekly longest.
- **intensity** — heart-rate proxy for time in Z4+ (hard) and Z3
  (tempo, the "grey zone").  Polarised training is rewarded; a large
  grey-zone share is penalised.
- **efficiency** — efficiency factor (power, or speed × 100, per beat)
  this week vs. baseline weeks.

All weeks are the trailing 7-day buckets of :func:`weekly_buckets`.
The overall score is the equal-weighted mean of the five dimensions.
"""

from __future__ import annotations

import datetime
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from app.core.instrumentation import ScoringObserver, notify
from app.engine.common import round_half_up
from app.engine.load import (
    DEFAULT_LOAD_CONFIG,
    DateLike,
    LoadConfig,
    as_day,
    compute_consistency,
    compute_load,
    weekly_buckets,
)
from app.schemas.activity import ActivityRecord
from app.schemas.scores import DimensionComponent, DimensionDetail
from app.schemas.training import DIMENSION_NAMES, DataQuality, TrainingDimensions, TrainingProfile

# ======================================================================
# Configuration
# ======================================================================

_DEFAULT_DIMENSION_WEIGHTS: dict[str, float] = {name: 0.2 for name in DIMENSION_NAMES}

# Data quality only looks at the trailing eight weeks.
_DATA_QUALITY_WINDOW = datetime.timedelta(weeks=8)


class ProfileConfig(BaseModel):
    """Configuration for the supplementary dimensions."""

    baseline_weeks: int = Field(4, ge=1, le=12)
    z4_threshold_bpm: float = Field(160.0, description="Average HR treated as hard work")
    z3_floor_bpm: float = Field(135.0, description="Average HR treated as tempo")
    min_valid_hr: float = Field(50.0, description="Average HR below this is ignored for EF")
    dimension_weights: dict[str, float] = Field(
        default_factory=lambda: dict(_DEFAULT_DIMENSION_WEIGHTS),
    )


DEFAULT_PROFILE_CONFIG = ProfileConfig()


def _to_minutes(seconds: float) -> int:
    return round_half_up(seconds / 60)


# ======================================================================
# Endurance
# ======================================================================


def compute_endurance(
    activities: Sequence[ActivityRecord],
    as_of: DateLike,
    config: Optional[ProfileConfig] = None,
) -> DimensionDetail:
    """Score this week's longest session against recent weekly longest."""
    cfg = config or DEFAULT_PROFILE_CONFIG
    buckets = weekly_buckets(activities, as_day(as_of), cfg.baseline_weeks + 1)

    current_longest = max((a.moving_time for a in buckets[0]), default=0)
    baseline_longest = [max((a.moving_time for a in week), default=0) for week in buckets[1:]]
    baseline_avg = sum(baseline_longest) / len(baseline_longest)

    if baseline_avg > 0:
        ratio = current_longest / baseline_avg
    elif current_longest > 0:
        ratio = 2.0
    else:
        ratio = 1.0

    if ratio > 1.10:
        score = 100
        suggestion = "Excellent! Pushing boundaries (> 110% of baseline)."
    elif ratio >= 0.95:
        score = 80
        suggestion = (
            "Comfort Zone. To reach Score 100, extend your long ride to "
            f"> {_to_minutes(baseline_avg * 1.10)} mins."
        )
    else:
        score = 50
        suggestion = (
            "Regression (< 95% baseline). Long ride needs to be at least "
            f"{_to_minutes(baseline_avg * 0.95)} mins to maintain."
        )

    return DimensionDetail(
        score=score,
        components=[
            DimensionComponent(name="This Week Longest", display_value=f"{_to_minutes(current_longest)}m"),
            DimensionComponent(
                name="Baseline Longest",
                display_value=f"{_to_minutes(baseline_avg)}m",
                contribution=score,
            ),
        ],
        trend="improving" if ratio >= 1.0 else "declining",
        suggestion=suggestion,
        metrics={"current_longest": float(current_longest), "baseline_longest": baseline_avg, "ratio": ratio},
        is_fallback=current_longest == 0 and baseline_avg == 0,
    )


# ======================================================================
# Intensity
# ======================================================================


def _zone_split(activity: ActivityRecord, cfg: ProfileConfig) -> tuple[float, float]:
    """Estimate ``(z4_seconds, z3_seconds)`` for one activity."""
    avg_hr = activity.average_heartrate
    if not avg_hr:
        return 0.0, 0.0
    t = activity.moving_time
    if avg_hr >= cfg.z4_threshold_bpm:
        return t * 0.9, t * 0.1
    if avg_hr >= cfg.z3_floor_bpm:
        return t * 0.1, t * 0.8
    if activity.max_heartrate and activity.max_heartrate >= cfg.z4_threshold_bpm + 10:
        # Intervals hidden behind a low average.
        return t * 0.15, t * 0.25
    return 0.0, 0.0


def compute_intensity(
    activities: Sequence[ActivityRecord],
    as_of: DateLike,
    config: Optional[ProfileConfig] = None,
) -> DimensionDetail:
    """Score this week's intensity distribution."""
    cfg = config or DEFAULT_PROFILE_CONFIG
    week = weekly_buckets(activities, as_day(as_of), 1)[0]

    total = 0.0
    z4 = 0.0
    z3 = 0.0
    for activity in week:
        total += activity.moving_time
        a_z4, a_z3 = _zone_split(activity, cfg)
        z4 += a_z4
        z3 += a_z3

    z4_pct = z4 / total * 100 if total > 0 else 0.0
    z3_pct = z3 / total * 100 if total > 0 else 0.0

    if z3_pct > 30:
        score = 60
        suggestion = (
            f"Junk Mile Penalty! Zone 3 is {z3_pct:.0f}% (>30%). "
            "Rides should be Hard (Z4) or Easy (Z2). Avoid the middle."
        )
    elif z4_pct >= 15 and z3_pct < 20:
        score = 100
        suggestion = "Perfect Polarization! High quality work with disciplined easy days."
    elif z4_pct >= 10:
        score = 75
        suggestion = "Good intensity, but watch your 'Grey Zone' (Z3) volume."
    else:
        score = 50
        suggestion = "Not enough intensity. Push harder on hard days (> 15% Z4)."

    return DimensionDetail(
        score=score,
        components=[
            DimensionComponent(name="Training Time", display_value=f"{_to_minutes(total)}m"),
            DimensionComponent(name="Z4+ (Hard)", display_value=f"{z4_pct:.1f}%"),
            DimensionComponent(name="Z3 (Tempo)", display_value=f"{z3_pct:.1f}%", contribution=score),
        ],
        trend="stable",
        suggestion=suggestion,
        metrics={"training_seconds": total, "z4_pct": z4_pct, "z3_pct": z3_pct},
        is_fallback=total == 0,
    )


# ======================================================================
# Efficiency
# ======================================================================


def efficiency_factor(activity: ActivityRecord, cfg: ProfileConfig = DEFAULT_PROFILE_CONFIG) -> Optional[float]:
    """Output per heart beat, or ``None`` without usable heart rate."""
    avg_hr = activity.average_heartrate
    if not avg_hr or avg_hr < cfg.min_valid_hr:
        return None

    output = activity.weighted_average_watts or activity.average_watts or 0.0
    if not output and activity.average_speed:
        output = activity.average_speed * 100
    return output / avg_hr


def _mean_ef(activities: Sequence[ActivityRecord], cfg: ProfileConfig) -> float:
    values = [ef for ef in (efficiency_factor(a, cfg) for a in activities) if ef is not None]
    return sum(values) / len(values) if values else 0.0


def compute_efficiency(
    activities: Sequence[ActivityRecord],
    as_of: DateLike,
    config: Optional[ProfileConfig] = None,
) -> DimensionDetail:
    """Score the efficiency-factor trend of this week vs. baseline weeks."""
    cfg = config or DEFAULT_PROFILE_CONFIG
    buckets = weekly_buckets(activities, as_day(as_of), cfg.baseline_weeks + 1)

    current = _mean_ef(buckets[0], cfg)
    baseline = _mean_ef([a for week in buckets[1:] for a in week], cfg)

    change_pct = (current - baseline) / baseline * 100 if baseline > 0 else 0.0
    is_fallback = current == 0 and baseline == 0

    if is_fallback:
        score = 50
        suggestion = "No HR/Power data to calculate efficiency."
    elif change_pct > 2.0:
        score = 100
        suggestion = f"Strong Efficiency Gains (+{change_pct:.1f}%)! Fitness is rising."
    elif change_pct >= 0:
        score = 85
        suggestion = f"Marginal Gains (+{change_pct:.1f}%). Push for > 2% improvement."
    else:
        score = 50
        suggestion = f"Efficiency Loss ({change_pct:.1f}%). Fatigue or detraining detected."

    if change_pct > 0:
        trend = "improving"
    elif change_pct < 0:
        trend = "declining"
    else:
        trend = "stable"

    return DimensionDetail(
        score=score,
        components=[
            DimensionComponent(name="Current EF", display_value=f"{current:.2f}"),
            DimensionComponent(name="Baseline EF", display_value=f"{baseline:.2f}", contribution=score),
        ],
        trend=trend,
        suggestion=suggestion,
        metrics={"current_ef": current, "baseline_ef": baseline, "change_pct": change_pct},
        is_fallback=is_fallback,
    )


# ======================================================================
# Data quality
# ======================================================================


def assess_data_quality(activities: Sequence[ActivityRecord], as_of: DateLike) -> DataQuality:
    """Classify how much history backs the profile.

    Only activities dated within the eight weeks up to and including
    *as_of* count, so the history length tops out at 56 days.
    """
    day = as_day(as_of)
    recent = [a for a in activities if day - _DATA_QUALITY_WINDOW <= a.day <= day]
    if not recent:
        return "limited"

    oldest = min(a.day for a in recent)
    days_history = (day - oldest).days
    hr_coverage = sum(1 for a in recent if a.average_heartrate) / len(recent)

    if days_history >= 42 and hr_coverage > 0.8:
        return "excellent"
    if days_history >= 28:
        return "good"
    return "limited"


# ======================================================================
# Main entry point
# ======================================================================


def compute_training_profile(
    activities: Sequence[ActivityRecord],
    as_of: DateLike,
    load_config: Optional[LoadConfig] = None,
    config: Optional[ProfileConfig] = None,
    observer: Optional[ScoringObserver] = None,
) -> TrainingProfile:
    """Compute all five training dimensions and the overall score.

    Args:
        activities: Activity history (any order).
        as_of: Reference date.
        load_config: Optional override for load and consistency.
        config: Optional override for the supplementary dimensions.
        observer: Optional instrumentation hook (forwarded to load and
            consistency as well).

    Returns:
        :class:`TrainingProfile`.
    """
    cfg = config or DEFAULT_PROFILE_CONFIG
    lcfg = load_config or DEFAULT_LOAD_CONFIG

    dimensions = TrainingDimensions(
        load=compute_load(activities, as_of, lcfg, observer),
        consistency=compute_consistency(activities, as_of, lcfg, observer),
        endurance=compute_endurance(activities, as_of, cfg),
        intensity=compute_intensity(activities, as_of, cfg),
        efficiency=compute_efficiency(activities, as_of, cfg),
    )

    weighted_sum = sum(
        getattr(dimensions, name).score * cfg.dimension_weights.get(name, 0.0)
        for name in DIMENSION_NAMES
    )
    overall = max(0, min(100, round_half_up(weighted_sum)))
    quality = assess_data_quality(activities, as_of)

    notify(observer, "training_profile", {
        "as_of": as_day(as_of).isoformat(),
        "scores": {name: getattr(dimensions, name).score for name in DIMENSION_NAMES},
        "overall": overall,
        "data_quality": quality,
    })

    return TrainingProfile(overall_score=overall, data_quality=quality, dimensions=dimensions)
