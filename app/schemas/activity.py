"""
Activity (workout) schemas.

An :class:`ActivityRecord` is one synced workout.  Training volume is
measured as ``moving_time`` (seconds); the optional heart-rate and power
fields feed the intensity and efficiency dimensions.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityRecord(BaseModel):
    """A single workout (immutable)."""

    model_config = ConfigDict(frozen=True)

    start: datetime.datetime = Field(
        ...,
        description="Local start time of the activity",
    )
    moving_time: int = Field(
        ..., ge=0,
        description="Moving time (seconds)",
    )
    sport_type: Optional[str] = Field(None, description="Ride, Run, Swim, ...")
    average_heartrate: Optional[float] = Field(None, ge=0.0, description="Average HR (bpm)")
    max_heartrate: Optional[float] = Field(None, ge=0.0, description="Max HR (bpm)")
    average_watts: Optional[float] = Field(None, ge=0.0)
    weighted_average_watts: Optional[float] = Field(None, ge=0.0)
    average_speed: Optional[float] = Field(None, ge=0.0, description="Average speed (m/s)")

    @property
    def day(self) -> datetime.date:
        return self.start.date()

    @property
    def moving_minutes(self) -> float:
        return self.moving_time / 60.0
