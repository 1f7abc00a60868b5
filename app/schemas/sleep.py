"""
Sleep record and sleep score schemas.

A :class:`SleepRecord` is one night as delivered by the ring sync layer.
All durations are in **seconds**; ``efficiency`` is a percentage.

The sleep score is a :class:`~app.schemas.scores.CompositeScore` with
seven components:

    totalSleep   0.25
    efficiency   0.20
    restfulness  0.15
    remSleep     0.15
    deepSleep    0.10
    latency      0.10
    timing       0.05
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SleepRecord(BaseModel):
    """A single night of sleep (immutable)."""

    model_config = ConfigDict(frozen=True)

    day: Optional[datetime.date] = Field(
        None,
        description="Calendar day the night is attributed to (YYYY-MM-DD)",
    )
    total_sleep_duration: float = Field(
        ..., ge=0.0,
        description="Total sleep time (seconds)",
    )
    efficiency: float = Field(
        ..., ge=0.0, le=100.0,
        description="Sleep efficiency (percentage of time in bed asleep)",
    )
    restless_periods: int = Field(
        ..., ge=0,
        description="Number of restless periods during the night",
    )
    rem_sleep_duration: float = Field(..., ge=0.0, description="REM sleep (seconds)")
    deep_sleep_duration: float = Field(..., ge=0.0, description="Deep sleep (seconds)")
    light_sleep_duration: float = Field(..., ge=0.0, description="Light sleep (seconds)")
    latency: float = Field(
        ..., ge=0.0,
        description="Time to fall asleep (seconds)",
    )
    bedtime_start: datetime.datetime = Field(
        ...,
        description="Bedtime start, in the sleeper's local offset",
    )
    bedtime_end: Optional[datetime.datetime] = Field(None, description="Bedtime end")
    time_in_bed: float = Field(..., ge=0.0, description="Time in bed (seconds)")

    # Nightly ring biometrics, used when resolving the day's readiness inputs.
    average_hrv: Optional[float] = Field(None, ge=0.0, description="Average nightly HRV (ms)")
    lowest_heart_rate: Optional[float] = Field(None, ge=0.0, description="Lowest nightly heart rate (bpm)")
    average_breath: Optional[float] = Field(None, ge=0.0, description="Average breathing rate (breaths/min)")
    temperature_deviation: Optional[float] = Field(
        None,
        description="Body temperature deviation from personal norm (°C)",
    )
