"""
API request bodies.

The engine is stateless: every request carries all the data needed for
one computation.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.activity import ActivityRecord
from app.schemas.physio import DailyBiometric, Demographic, ManualDailyMetric
from app.schemas.sleep import SleepRecord


class ReadinessRequest(BaseModel):
    """Today's biometrics plus the history used for the baseline."""

    today: DailyBiometric
    history: list[DailyBiometric] = Field(
        default_factory=list,
        description="Prior days in chronological order",
    )
    demographic: Optional[Demographic] = None


class ResolveRequest(BaseModel):
    """Both candidate sources for one day's biometrics."""

    day: datetime.date
    ring_night: Optional[SleepRecord] = None
    manual: Optional[ManualDailyMetric] = None


class TrainingRequest(BaseModel):
    """Activity history and the reference date."""

    activities: list[ActivityRecord] = Field(default_factory=list)
    as_of: Optional[datetime.date] = Field(
        None,
        description="Reference date (defaults to today)",
    )


class ManualRecoveryRequest(BaseModel):
    """A manually logged day and optional population context."""

    metric: ManualDailyMetric
    demographic: Optional[Demographic] = None
