"""
Manual recovery — population-calibrated scoring for manually logged days.

When a day comes from manual entry (or an Apple Health import) rather
than the ring, there is usually no personal baseline to compare against.
Each logged metric is then scored on an absolute scale:

    sleep   sleep_minutes / 480 × 100, capped at 100
    hrv     :func:`~app.engine.calibration.calibrate_hrv_score`
    rhr     :func:`~app.engine.calibration.calibrate_resting_hr_score`

Zero or missing values are "not logged" and skipped.  The recovery score
is the half-up-rounded mean of the available scores, using the unrounded
sleep value; a day with nothing logged scores 0 and is flagged
``is_fallback``.
"""

from __future__ import annotations

from typing import Optional

from app.core.instrumentation import ScoringObserver, notify
from app.engine.calibration import calibrate_hrv_score, calibrate_resting_hr_score
from app.engine.common import round_half_up
from app.schemas.physio import Demographic, ManualDailyMetric
from app.schemas.readiness import ManualRecoveryResult

# Eight hours of sleep scores 100.
TARGET_SLEEP_MINUTES = 480.0


def _logged(value: Optional[float]) -> bool:
    return value is not None and value > 0


def sleep_minutes_score(sleep_minutes: float) -> float:
    """Unrounded sleep score for a night of *sleep_minutes*."""
    return min(100.0, sleep_minutes / TARGET_SLEEP_MINUTES * 100)


def compute_manual_recovery(
    metric: ManualDailyMetric,
    demographic: Optional[Demographic] = None,
    observer: Optional[ScoringObserver] = None,
) -> ManualRecoveryResult:
    """Score a manually logged day against population references.

    Args:
        metric: The logged day.
        demographic: Optional gender / age bucket for the reference bands.
        observer: Optional instrumentation hook.

    Returns:
        :class:`ManualRecoveryResult` with the individual and mean scores.
    """
    raw_sleep: Optional[float] = None
    hrv_score: Optional[int] = None
    rhr_score: Optional[int] = None

    if _logged(metric.sleep_minutes):
        raw_sleep = sleep_minutes_score(metric.sleep_minutes)
    if _logged(metric.hrv):
        hrv_score = calibrate_hrv_score(metric.hrv, demographic)
    if _logged(metric.resting_hr):
        rhr_score = calibrate_resting_hr_score(metric.resting_hr, demographic)

    available = [s for s in (raw_sleep, hrv_score, rhr_score) if s is not None]
    recovery = round_half_up(sum(available) / len(available)) if available else 0

    notify(observer, "manual_recovery", {
        "date": metric.date.isoformat(),
        "source": metric.source,
        "sleep": raw_sleep,
        "hrv": hrv_score,
        "rhr": rhr_score,
        "recovery": recovery,
    })

    return ManualRecoveryResult(
        sleep_score=round_half_up(raw_sleep) if raw_sleep is not None else None,
        hrv_score=hrv_score,
        rhr_score=rhr_score,
        recovery_score=recovery,
        is_fallback=not available,
    )
