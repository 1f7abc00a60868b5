"""
Sleep score — one night against fixed physiological targets.

The sleep score has no dependency on history.  Each of seven components
is scored 0-100 from the raw record, then combined with fixed weights:

    totalSleep   0.25   hours asleep, optimal 7-9h
    efficiency   0.20   percentage asleep while in bed (pass-through)
    restfulness  0.15   restless periods per minute of sleep
    remSleep     0.15   REM share of sleep, optimal 20-25%
    deepSleep    0.10   deep share of sleep, optimal 15-20%
    latency      0.10   minutes to fall asleep, optimal 10-20
    timing       0.05   local bedtime hour, optimal 21-23h

Every component is clamped to [0, 100] before weighting; the weighted
total is rounded half-up and clamped again.

Degenerate input
----------------
A night with zero ``total_sleep_duration`` is scored, not rejected: the
REM and deep shares are taken as 0%, and the restless rate is 0 when no
restless periods were recorded (infinite, hence floored, otherwise).
"""

from __future__ import annotations

import math
from typing import Optional, Self

from pydantic import BaseModel, Field, model_validator

from app.core.instrumentation import ScoringObserver, notify
from app.engine.common import clamp_score, round_half_up
from app.schemas.scores import CompositeScore, ScoreComponent
from app.schemas.sleep import SleepRecord

# ======================================================================
# Configuration
# ======================================================================

_DEFAULT_WEIGHTS: dict[str, float] = {
    "totalSleep": 0.25,
    "efficiency": 0.20,
    "restfulness": 0.15,
    "remSleep": 0.15,
    "deepSleep": 0.10,
    "latency": 0.10,
    "timing": 0.05,
}

_WEIGHT_SUM_TOLERANCE = 1e-9

# Score bands used by display layers.
_SLEEP_BANDS: list[tuple[str, float]] = [
    ("optimal", 85.0),
    ("good", 70.0),
]


class SleepScoreConfig(BaseModel):
    """Component weights for the sleep score (must sum to 1.0)."""

    weights: dict[str, float] = Field(
        default_factory=lambda: dict(_DEFAULT_WEIGHTS),
    )

    @model_validator(mode="after")
    def validate_weights(self) -> Self:
        """Require exactly the seven components, summing to 1.0."""
        missing = set(_DEFAULT_WEIGHTS) - set(self.weights)
        unknown = set(self.weights) - set(_DEFAULT_WEIGHTS)
        if missing or unknown:
            raise ValueError(
                f"Sleep weights must name exactly {sorted(_DEFAULT_WEIGHTS)}; "
                f"missing={sorted(missing)}, unknown={sorted(unknown)}"
            )
        total = sum(self.weights.values())
        if abs(total - 1.0) > _WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"Sleep weights must sum to 1.0, got {total}")
        return self


DEFAULT_SLEEP_CONFIG = SleepScoreConfig()


# ======================================================================
# Helpers
# ======================================================================


def _share_pct(part_seconds: float, total_seconds: float) -> float:
    """Percentage of *total_seconds* spent in *part_seconds* (0 if no sleep)."""
    if total_seconds <= 0:
        return 0.0
    return part_seconds / total_seconds * 100.0


# ======================================================================
# Component scores
# ======================================================================


def score_total_sleep(hours: float) -> float:
    """Score total sleep time (hours)."""
    if 7 <= hours <= 9:
        return 100.0
    if 6 <= hours < 7:
        return 80 + (hours - 6) * 20
    if 9 < hours <= 10:
        return 100 - (hours - 9) * 20
    if 5 <= hours < 6:
        return 60 + (hours - 5) * 20
    if 10 < hours <= 11:
        return 80 - (hours - 10) * 20
    if hours < 5:
        return max(20.0, 60 - (5 - hours) * 15)
    return max(20.0, 60 - (hours - 11) * 10)


def score_efficiency(efficiency: float) -> float:
    """Efficiency is already a percentage; only the ceiling is enforced."""
    return min(efficiency, 100.0)


def score_restfulness(restless_periods: int, sleep_hours: float) -> float:
    """Score restless periods per minute of sleep."""
    if sleep_hours > 0:
        rate = restless_periods / (sleep_hours * 60)
    elif restless_periods > 0:
        rate = math.inf
    else:
        rate = 0.0

    if rate <= 0.5:
        return 100.0
    if rate <= 1.0:
        return 100 - (rate - 0.5) * 40
    if rate <= 2.0:
        return 80 - (rate - 1.0) * 30
    return max(20.0, 50 - (rate - 2.0) * 10)


def score_rem_sleep(rem_pct: float) -> float:
    """Score REM sleep as a share (%) of total sleep."""
    if 20 <= rem_pct <= 25:
        return 100.0
    if 15 <= rem_pct < 20:
        return 80 + (rem_pct - 15) * 4
    if 25 < rem_pct <= 30:
        return 100 - (rem_pct - 25) * 4
    if 10 <= rem_pct < 15:
        return 60 + (rem_pct - 10) * 4
    if 30 < rem_pct <= 35:
        return 80 - (rem_pct - 30) * 4
    return 40.0


def score_deep_sleep(deep_pct: float) -> float:
    """Score deep sleep as a share (%) of total sleep."""
    if 15 <= deep_pct <= 20:
        return 100.0
    if 10 <= deep_pct < 15:
        return 80 + (deep_pct - 10) * 4
    if 20 < deep_pct <= 25:
        return 100 - (deep_pct - 20) * 4
    if 5 <= deep_pct < 10:
        return 60 + (deep_pct - 5) * 4
    return 50.0


def score_latency(minutes: float) -> float:
    """Score sleep onset latency (minutes).

    Falling asleep in under 5 minutes is penalised: it usually signals
    accumulated sleep debt.
    """
    if 10 <= minutes <= 20:
        return 100.0
    if 5 <= minutes < 10:
        return 90 + (minutes - 5) * 2
    if 20 < minutes <= 30:
        return 100 - (minutes - 20) * 2
    if minutes < 5:
        return 90 - (5 - minutes) * 5
    return max(40.0, 80 - (minutes - 30) * 2)


def score_timing(bedtime_hour: int) -> float:
    """Score the local bedtime hour (0-23)."""
    if 21 <= bedtime_hour <= 23:
        return 100.0
    if bedtime_hour == 20:
        return 90.0
    if 0 <= bedtime_hour <= 1 or bedtime_hour == 19:
        return 85.0
    if 2 <= bedtime_hour <= 3 or bedtime_hour == 18:
        return 75.0
    return 60.0


def label_sleep_score(score: float) -> str:
    """Map a sleep score to its display band."""
    for label, low in _SLEEP_BANDS:
        if score >= low:
            return label
    return "pay_attention"


# ======================================================================
# Main entry point
# ======================================================================


def compute_sleep_score(
    record: SleepRecord,
    config: Optional[SleepScoreConfig] = None,
    observer: Optional[ScoringObserver] = None,
) -> CompositeScore:
    """Score a single night.

    Args:
        record: The night to score.
        config: Optional weight override.
        observer: Optional instrumentation hook.

    Returns:
        :class:`CompositeScore` with the seven named components.
    """
    cfg = config or DEFAULT_SLEEP_CONFIG

    sleep_hours = record.total_sleep_duration / 3600.0
    latency_minutes = record.latency / 60.0
    rem_pct = _share_pct(record.rem_sleep_duration, record.total_sleep_duration)
    deep_pct = _share_pct(record.deep_sleep_duration, record.total_sleep_duration)

    raw_scores: dict[str, float] = {
        "totalSleep": score_total_sleep(sleep_hours),
        "efficiency": score_efficiency(record.efficiency),
        "restfulness": score_restfulness(record.restless_periods, sleep_hours),
        "remSleep": score_rem_sleep(rem_pct),
        "deepSleep": score_deep_sleep(deep_pct),
        "latency": score_latency(latency_minutes),
        "timing": score_timing(record.bedtime_start.hour),
    }

    components: dict[str, ScoreComponent] = {}
    weighted_sum = 0.0
    for name, raw in raw_scores.items():
        weight = cfg.weights[name]
        score = clamp_score(raw)
        components[name] = ScoreComponent(score=score, weight=weight)
        weighted_sum += score * weight

    total = max(0, min(100, round_half_up(weighted_sum)))

    notify(observer, "sleep", {
        "sleep_hours": sleep_hours,
        "latency_minutes": latency_minutes,
        "rem_pct": rem_pct,
        "deep_pct": deep_pct,
        "scores": raw_scores,
        "weighted_sum": weighted_sum,
        "total": total,
    })

    return CompositeScore(
        total_score=total,
        components=components,
        label=label_sleep_score(total),
    )
