"""
Metric source resolution — ring data vs. manually logged data.

A day's biometrics can come from two places: the ring's nightly sleep
record or a manual / imported daily entry.  Each metric is resolved
independently into a tagged value:

    ring         the ring reported a usable value
    manual       no ring value, but the daily entry has one
    unavailable  neither source has a usable value

Ring data always wins.  Zero is treated as "not recorded" for the
physiological rates (a resting HR of 0 is a missing reading, not a
measurement); a temperature deviation of 0.0 is a real value.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from app.schemas.physio import DailyBiometric, ManualDailyMetric
from app.schemas.sleep import SleepRecord


class MetricSource(str, Enum):
    RING = "ring"
    MANUAL = "manual"
    UNAVAILABLE = "unavailable"


class SourcedValue(BaseModel):
    """A metric value tagged with where it came from."""

    source: MetricSource
    value: Optional[float] = None

    @property
    def is_available(self) -> bool:
        return self.source is not MetricSource.UNAVAILABLE


UNAVAILABLE = SourcedValue(source=MetricSource.UNAVAILABLE)


class ResolvedBiometrics(BaseModel):
    """The day's biometrics plus the per-metric provenance."""

    biometric: DailyBiometric
    sources: dict[str, SourcedValue]


def _usable(value: Optional[float], zero_is_missing: bool) -> bool:
    if value is None:
        return False
    if zero_is_missing and value == 0:
        return False
    return True


def resolve_metric(
    ring_value: Optional[float],
    manual_value: Optional[float],
    zero_is_missing: bool = True,
) -> SourcedValue:
    """Pick the ring value, then the manual value, else unavailable."""
    if _usable(ring_value, zero_is_missing):
        return SourcedValue(source=MetricSource.RING, value=ring_value)
    if _usable(manual_value, zero_is_missing):
        return SourcedValue(source=MetricSource.MANUAL, value=manual_value)
    return UNAVAILABLE


def resolve_daily_biometric(
    day: datetime.date,
    ring_night: Optional[SleepRecord] = None,
    manual: Optional[ManualDailyMetric] = None,
) -> ResolvedBiometrics:
    """Build the :class:`DailyBiometric` for *day* from both sources."""
    sources = {
        "hrv": resolve_metric(
            ring_night.average_hrv if ring_night else None,
            manual.hrv if manual else None,
        ),
        "resting_hr": resolve_metric(
            ring_night.lowest_heart_rate if ring_night else None,
            manual.resting_hr if manual else None,
        ),
        "respiratory_rate": resolve_metric(
            ring_night.average_breath if ring_night else None,
            manual.respiratory_rate if manual else None,
        ),
        "temperature_deviation": resolve_metric(
            ring_night.temperature_deviation if ring_night else None,
            manual.temperature_deviation if manual else None,
            zero_is_missing=False,
        ),
    }

    biometric = DailyBiometric(
        date=day,
        **{name: sourced.value for name, sourced in sources.items()},
    )
    return ResolvedBiometrics(biometric=biometric, sources=sources)
