"""
Daily physiological input schemas.

- :class:`DailyBiometric` — the resolved biometrics for one calendar day,
  consumed by the readiness calculator (today's record and history alike).
- :class:`ManualDailyMetric` — a manually logged (or CSV-imported) day,
  one of the two sources reconciled by :mod:`app.engine.sources`.
- :class:`Demographic` — optional population context for calibration.

Every metric is optional: ``None`` means "not recorded that day".
"""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DailyBiometric(BaseModel):
    """One day of biometrics (immutable)."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(..., description="Calendar date (YYYY-MM-DD)")
    hrv: Optional[float] = Field(
        None, ge=0.0,
        description="Heart rate variability (ms)",
    )
    resting_hr: Optional[float] = Field(
        None, ge=0.0,
        description="Resting heart rate (bpm)",
    )
    temperature_deviation: Optional[float] = Field(
        None,
        description="Signed body temperature deviation from personal norm (°C)",
    )
    respiratory_rate: Optional[float] = Field(
        None, ge=0.0,
        description="Respiratory rate (breaths/min)",
    )


class ManualDailyMetric(BaseModel):
    """A manually logged day of metrics (immutable)."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    sleep_minutes: Optional[float] = Field(None, ge=0.0)
    resting_hr: Optional[float] = Field(None, ge=0.0)
    hrv: Optional[float] = Field(None, ge=0.0)
    respiratory_rate: Optional[float] = Field(None, ge=0.0)
    temperature_deviation: Optional[float] = None
    source: Literal["manual", "apple_health"] = "manual"


class Demographic(BaseModel):
    """Population context used to parametrize calibration."""

    model_config = ConfigDict(frozen=True)

    gender: Optional[str] = Field(None, description="'male' or 'female'")
    age_bucket: Optional[str] = Field(
        None,
        description="One of: 18-24, 25-34, 35-44, 45-54, 55-64, 65+",
    )

    @property
    def is_complete(self) -> bool:
        return bool(self.gender) and bool(self.age_bucket)
