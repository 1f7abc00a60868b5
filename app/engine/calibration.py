"""
Population reference calibration.

Reference bands for HRV and resting heart rate by gender and age bucket.
They serve two purposes:

1. Parametrizing the baseline-relative readiness transform: the width of
   the demographic band sets the minimum spread used to normalise HRV and
   resting HR deviations (see :func:`minimum_spread`).
2. Absolute scoring helpers (:func:`calibrate_hrv_score`,
   :func:`calibrate_resting_hr_score`) for days with no personal history
   worth comparing against.

Unknown genders fall back to the male table; unknown or missing buckets
fall back to a generic band.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from app.engine.common import round_half_up
from app.schemas.physio import Demographic


class ReferenceBand(NamedTuple):
    low: float
    target: float
    high: float

    @property
    def width(self) -> float:
        return self.high - self.low


_HRV_REFERENCE: dict[str, dict[str, ReferenceBand]] = {
    "male": {
        "18-24": ReferenceBand(55, 78, 105),
        "25-34": ReferenceBand(48, 70, 95),
        "35-44": ReferenceBand(42, 60, 85),
        "45-54": ReferenceBand(35, 48, 70),
        "55-64": ReferenceBand(25, 40, 60),
        "65+": ReferenceBand(20, 35, 50),
    },
    "female": {
        "18-24": ReferenceBand(50, 75, 100),
        "25-34": ReferenceBand(45, 67, 92),
        "35-44": ReferenceBand(40, 58, 82),
        "45-54": ReferenceBand(33, 46, 68),
        "55-64": ReferenceBand(25, 38, 58),
        "65+": ReferenceBand(20, 33, 48),
    },
}

_RHR_REFERENCE: dict[str, dict[str, ReferenceBand]] = {
    "male": {
        "18-24": ReferenceBand(56, 62, 73),
        "25-34": ReferenceBand(57, 64, 74),
        "35-44": ReferenceBand(58, 65, 76),
        "45-54": ReferenceBand(59, 66, 77),
        "55-64": ReferenceBand(60, 68, 79),
        "65+": ReferenceBand(62, 70, 80),
    },
    "female": {
        "18-24": ReferenceBand(61, 68, 78),
        "25-34": ReferenceBand(62, 70, 79),
        "35-44": ReferenceBand(63, 71, 81),
        "45-54": ReferenceBand(64, 73, 82),
        "55-64": ReferenceBand(65, 75, 84),
        "65+": ReferenceBand(67, 77, 86),
    },
}

DEFAULT_HRV_BAND = ReferenceBand(30, 55, 80)
DEFAULT_RHR_BAND = ReferenceBand(60, 70, 80)

# Fraction of the reference band width used as the minimum spread.
_SPREAD_FRACTION = 0.1


def _gender_key(gender: Optional[str]) -> str:
    return "female" if gender == "female" else "male"


def hrv_reference(demographic: Optional[Demographic]) -> ReferenceBand:
    if demographic is None or not demographic.is_complete:
        return DEFAULT_HRV_BAND
    table = _HRV_REFERENCE[_gender_key(demographic.gender)]
    return table.get(demographic.age_bucket or "", DEFAULT_HRV_BAND)


def resting_hr_reference(demographic: Optional[Demographic]) -> ReferenceBand:
    if demographic is None or not demographic.is_complete:
        return DEFAULT_RHR_BAND
    table = _RHR_REFERENCE[_gender_key(demographic.gender)]
    return table.get(demographic.age_bucket or "", DEFAULT_RHR_BAND)


def minimum_spread(band: ReferenceBand) -> float:
    """Smallest spread allowed when normalising a deviation."""
    return band.width * _SPREAD_FRACTION


# ======================================================================
# Absolute scoring
# ======================================================================


def _default_hrv_score(hrv: float) -> int:
    if hrv >= 65:
        return min(100, round_half_up(80 + (hrv - 65) * 0.5))
    if hrv >= 40:
        return round_half_up(60 + (hrv - 40) / 25 * 20)
    if hrv >= 20:
        return round_half_up(40 + (hrv - 20) / 20 * 20)
    return round_half_up(hrv / 20 * 40)


def _default_resting_hr_score(rhr: float) -> int:
    if rhr <= 60:
        return 100
    if rhr <= 70:
        return round_half_up(90 - (rhr - 60))
    if rhr <= 80:
        return round_half_up(80 - (rhr - 70) * 1.5)
    if rhr <= 90:
        return round_half_up(65 - (rhr - 80) * 1.5)
    return max(20, round_half_up(50 - (rhr - 90)))


def calibrate_hrv_score(hrv: float, demographic: Optional[Demographic] = None) -> int:
    """Score an HRV reading against the population band (0-100)."""
    if demographic is None or not demographic.is_complete:
        return _default_hrv_score(hrv)

    ref = hrv_reference(demographic)
    if hrv >= ref.target:
        above = min((hrv - ref.target) / (ref.high - ref.target), 1.0)
        return round_half_up(80 + above * 20)
    if hrv >= ref.low:
        return round_half_up(60 + (hrv - ref.low) / (ref.target - ref.low) * 20)
    return round_half_up(max(0.0, hrv / ref.low) * 60)


def calibrate_resting_hr_score(rhr: float, demographic: Optional[Demographic] = None) -> int:
    """Score a resting HR reading against the population band (0-100)."""
    if demographic is None or not demographic.is_complete:
        return _default_resting_hr_score(rhr)

    ref = resting_hr_reference(demographic)
    if rhr <= ref.low:
        return 100
    if rhr <= ref.target:
        return round_half_up(100 - (rhr - ref.low) / (ref.target - ref.low) * 20)
    if rhr <= ref.high:
        return round_half_up(80 - (rhr - ref.target) / (ref.high - ref.target) * 30)
    above_max = min((rhr - ref.high) / 20, 1.0)
    return round_half_up(50 - above_max * 30)
