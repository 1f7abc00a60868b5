"""
Biometric readiness — today's biometrics vs. a rolling personal baseline.

Readiness answers "how prepared is the body for load today?" from four
overnight biometrics.  Each is scored **relative to the athlete's own
trailing baseline**, not to population norms.

Model
-----
For each metric:

1. Baseline = mean and population spread of the metric over the
   trailing window (default 30 days), excluding today by date.
2. The deviation is normalised into a z-score, oriented so that positive
   means favourable:

       f = +z   for HRV                (higher is better)
       f = -z   for resting HR, temperature and respiratory rate

3. ``f`` is mapped onto 0-100 with the baseline itself at 90:

       f >= 0  ->  min(100, 90 + 10 f)
       f <  0  ->  max(0,   90 - 20 |f|)

   so one spread of unfavourable drift costs 20 points.

4. Trend is the raw direction of today vs. baseline (``up`` / ``down`` /
   ``stable`` within a per-metric epsilon).  It is never inverted here;
   resting HR carries ``inverse_trend`` so the display layer can colour
   an ``up`` as unfavourable.

Metrics with fewer than ``min_baseline_days`` samples (or no reading
today) fall back to a neutral 50, trend ``stable``, never elevated, and
are excluded from the overall score.

Elevation
---------
- Temperature deviation above +0.8 °C sets ``is_elevated`` whatever the
  score, and replaces the status message with a rest-focused one.
- Respiratory rate more than 1.5 breaths/min above baseline sets
  ``is_elevated`` and appends a milder caution.

Demographic context only parametrizes the transform: it selects the
population band whose width sets the minimum HRV / resting HR spread.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Sequence

from pydantic import BaseModel, Field

from app.core.instrumentation import ScoringObserver, notify
from app.engine.baseline import Baseline, compute_baseline
from app.engine.calibration import hrv_reference, minimum_spread, resting_hr_reference
from app.engine.common import clamp_score, round_half_up
from app.schemas.physio import DailyBiometric, Demographic
from app.schemas.readiness import (
    METRIC_NAMES,
    MetricDetail,
    MetricTrend,
    ReadinessBreakdown,
    ReadinessDetails,
    ReadinessResult,
)

# ======================================================================
# Configuration
# ======================================================================

# Smallest change (raw units) that counts as a trend.
_DEFAULT_TREND_EPSILON: dict[str, float] = {
    "hrv": 1.0,
    "rhr": 0.5,
    "temperature": 0.05,
    "respiratory": 0.1,
}

# Minimum spread for metrics without a demographic reference band.
_DEFAULT_MIN_SPREAD: dict[str, float] = {
    "temperature": 0.1,
    "respiratory": 0.3,
}

# Status bands: (status, label, lower bound).
_STATUS_BANDS: list[tuple[str, str, float]] = [
    ("Prime", "Prime State", 80.0),
    ("Good", "Strained / Normal", 50.0),
    ("Rest Required", "Recovery Needed", float("-inf")),
]

_STATUS_MESSAGES: dict[str, str] = {
    "Prime": "Fully recovered. Your body is ready for a hard session.",
    "Good": "Moderately recovered. Train as planned but keep intensity in check.",
    "Rest Required": "Recovery needed. Prioritise rest, sleep and easy movement today.",
}

_NO_DATA_MESSAGE = (
    "Not enough baseline history yet. Keep syncing daily to unlock readiness."
)


class ReadinessConfig(BaseModel):
    """Configuration for the readiness computation."""

    baseline_days: int = Field(30, ge=1, description="Trailing baseline window (days)")
    min_baseline_days: int = Field(5, ge=1, description="Samples required for a baseline")
    neutral_score: float = Field(50.0, ge=0.0, le=100.0)
    at_baseline_score: float = Field(90.0, ge=0.0, le=100.0)
    favourable_slope: float = Field(10.0, ge=0.0, description="Points per favourable spread")
    unfavourable_slope: float = Field(20.0, ge=0.0, description="Points lost per unfavourable spread")
    temperature_elevated_threshold: float = Field(0.8, description="°C above personal norm")
    respiratory_elevated_delta: float = Field(1.5, description="Breaths/min above baseline")
    trend_epsilon: dict[str, float] = Field(
        default_factory=lambda: dict(_DEFAULT_TREND_EPSILON),
    )
    min_spread: dict[str, float] = Field(
        default_factory=lambda: dict(_DEFAULT_MIN_SPREAD),
    )


DEFAULT_READINESS_CONFIG = ReadinessConfig()


class _MetricDef(NamedTuple):
    name: str
    extract: Callable[[DailyBiometric], Optional[float]]
    direction: float
    inverse_trend: bool


_METRICS: list[_MetricDef] = [
    _MetricDef("hrv", lambda d: d.hrv, 1.0, False),
    _MetricDef("rhr", lambda d: d.resting_hr, -1.0, True),
    _MetricDef("temperature", lambda d: d.temperature_deviation, -1.0, False),
    _MetricDef("respiratory", lambda d: d.respiratory_rate, -1.0, False),
]


# ======================================================================
# Labelling
# ======================================================================


def _label_status(score: float) -> tuple[str, str]:
    """Map an overall score to ``(status, label)``."""
    for status, label, low in _STATUS_BANDS:
        if score >= low:
            return status, label
    return _STATUS_BANDS[-1][0], _STATUS_BANDS[-1][1]


def _classify_trend(value: float, baseline: float, epsilon: float) -> MetricTrend:
    delta = value - baseline
    if delta > epsilon:
        return "up"
    if delta < -epsilon:
        return "down"
    return "stable"


# ======================================================================
# Per-metric computation
# ======================================================================


def _score_deviation(favourable_z: float, cfg: ReadinessConfig) -> float:
    """Map an oriented z-score onto 0-100 (baseline -> at_baseline_score)."""
    if favourable_z >= 0:
        return clamp_score(cfg.at_baseline_score + cfg.favourable_slope * favourable_z)
    return clamp_score(cfg.at_baseline_score - cfg.unfavourable_slope * abs(favourable_z))


def _min_spread_for(
    metric: str,
    demographic: Optional[Demographic],
    cfg: ReadinessConfig,
) -> float:
    if metric == "hrv":
        return minimum_spread(hrv_reference(demographic))
    if metric == "rhr":
        return minimum_spread(resting_hr_reference(demographic))
    return cfg.min_spread.get(metric, 0.1)


def _is_elevated(
    metric: str,
    value: float,
    baseline: Baseline,
    cfg: ReadinessConfig,
) -> bool:
    if metric == "temperature":
        return value > cfg.temperature_elevated_threshold
    if metric == "respiratory":
        return value - baseline.mean > cfg.respiratory_elevated_delta
    return False


def _compute_metric(
    definition: _MetricDef,
    today: DailyBiometric,
    history: Sequence[DailyBiometric],
    demographic: Optional[Demographic],
    cfg: ReadinessConfig,
) -> MetricDetail:
    """Compute the baseline-relative detail for a single metric."""
    value = definition.extract(today)
    baseline = compute_baseline(
        history, today.date, definition.extract,
        window_days=cfg.baseline_days,
        min_samples=cfg.min_baseline_days,
    )

    if value is None or baseline is None:
        return MetricDetail(
            value=value,
            baseline=baseline.mean if baseline else None,
            spread=baseline.spread if baseline else None,
            score=cfg.neutral_score,
            trend="stable",
            is_elevated=False,
            inverse_trend=definition.inverse_trend,
            is_fallback=True,
            sample_count=baseline.sample_count if baseline else 0,
        )

    spread = max(baseline.spread, _min_spread_for(definition.name, demographic, cfg))
    z = (value - baseline.mean) / spread
    score = _score_deviation(definition.direction * z, cfg)

    return MetricDetail(
        value=value,
        baseline=round(baseline.mean, 3),
        spread=round(spread, 3),
        score=round(score, 1),
        trend=_classify_trend(value, baseline.mean, cfg.trend_epsilon.get(definition.name, 0.0)),
        is_elevated=_is_elevated(definition.name, value, baseline, cfg),
        inverse_trend=definition.inverse_trend,
        is_fallback=False,
        sample_count=baseline.sample_count,
    )


# ======================================================================
# Aggregation
# ======================================================================


def _compute_overall(details: dict[str, MetricDetail]) -> tuple[int, bool]:
    """Mean of the non-fallback metric scores.

    Returns:
        ``(score, is_fallback)``
    """
    valid = [d.score for d in details.values() if not d.is_fallback]
    if not valid:
        return 0, True
    mean = sum(valid) / len(valid)
    return max(0, min(100, round_half_up(mean))), False


def _generate_message(
    status: str,
    details: dict[str, MetricDetail],
    is_fallback: bool,
) -> str:
    """Generate the human-readable status message."""
    if is_fallback:
        return _NO_DATA_MESSAGE

    temperature = details["temperature"]
    if temperature.is_elevated:
        return (
            f"Body temperature is elevated ({temperature.value:+.1f}°C). "
            "Rest today and watch for signs of illness."
        )

    message = _STATUS_MESSAGES[status]
    if details["respiratory"].is_elevated:
        message += " Respiratory rate is above your baseline, so keep today's effort easy."
    return message


# ======================================================================
# Main entry point
# ======================================================================


def compute_readiness(
    today: DailyBiometric,
    history: Sequence[DailyBiometric],
    demographic: Optional[Demographic] = None,
    config: Optional[ReadinessConfig] = None,
    observer: Optional[ScoringObserver] = None,
) -> ReadinessResult:
    """Compute baseline-relative readiness for one day.

    Args:
        today: The day being scored.
        history: Chronologically ordered prior days.  Entries dated
            ``today.date`` are ignored.
        demographic: Optional population context.
        config: Optional :class:`ReadinessConfig` override.
        observer: Optional instrumentation hook.

    Returns:
        :class:`ReadinessResult` with score, status, breakdown and details.
    """
    cfg = config or DEFAULT_READINESS_CONFIG

    details: dict[str, MetricDetail] = {
        definition.name: _compute_metric(definition, today, history, demographic, cfg)
        for definition in _METRICS
    }

    score, is_fallback = _compute_overall(details)
    status, status_label = _label_status(score)
    message = _generate_message(status, details, is_fallback)

    notify(observer, "readiness", {
        "date": today.date.isoformat(),
        "metrics": {name: details[name].model_dump() for name in METRIC_NAMES},
        "score": score,
        "status": status,
        "is_fallback": is_fallback,
    })

    return ReadinessResult(
        score=score,
        status=status,
        status_label=status_label,
        message=message,
        is_fallback=is_fallback,
        breakdown=ReadinessBreakdown(
            hrv_score=details["hrv"].score,
            rhr_score=details["rhr"].score,
            temp_component=details["temperature"].score,
            resp_component=details["respiratory"].score,
        ),
        details=ReadinessDetails(**details),
    )
