"""
Biometric readiness schemas.

Readiness scores four biometrics for one day **relative to a rolling
personal baseline**:

    hrv          higher than baseline is favourable
    rhr          lower than baseline is favourable (inverse trend)
    temperature  deviation above +0.8 °C flags elevation
    respiratory  rise above baseline flags a milder elevation

The overall score is the mean of the metrics with a real baseline and
is banded into:

    Prime          score >= 80   "Prime State"
    Good           50 <= score < 80   "Strained / Normal"
    Rest Required  score < 50    "Recovery Needed"
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

MetricTrend = Literal["up", "down", "stable"]
ReadinessStatus = Literal["Prime", "Good", "Rest Required"]

METRIC_NAMES = ["hrv", "rhr", "temperature", "respiratory"]


class MetricDetail(BaseModel):
    """Baseline-relative state of a single biometric."""

    value: Optional[float] = Field(None, description="Today's raw value (None if not recorded)")
    baseline: Optional[float] = Field(None, description="Trailing-window mean (None if insufficient history)")
    spread: Optional[float] = Field(None, description="Trailing-window spread used for normalisation")
    score: float = Field(..., ge=0.0, le=100.0)
    trend: MetricTrend = Field(
        "stable",
        description="Raw direction of today vs baseline, never inverted",
    )
    is_elevated: bool = False
    inverse_trend: bool = Field(
        False,
        description="True when an 'up' trend is unfavourable (resting HR)",
    )
    is_fallback: bool = Field(
        False,
        description="True when the score is the neutral default (no reliable baseline)",
    )
    sample_count: int = Field(0, ge=0, description="Baseline days used")


class ReadinessBreakdown(BaseModel):
    """Per-metric scores feeding the overall readiness."""

    hrv_score: float
    rhr_score: float
    temp_component: float
    resp_component: float


class ReadinessDetails(BaseModel):
    """Per-metric detail for display."""

    hrv: MetricDetail
    rhr: MetricDetail
    temperature: MetricDetail
    respiratory: MetricDetail


class ReadinessResult(BaseModel):
    """Full readiness assessment for one day."""

    score: int = Field(..., ge=0, le=100)
    status: ReadinessStatus
    status_label: str = Field(..., description="Display label for the status band")
    message: str = Field(..., description="Human-readable guidance")
    is_fallback: bool = Field(
        False,
        description="True when no metric had a usable baseline",
    )
    breakdown: ReadinessBreakdown
    details: ReadinessDetails


class ManualRecoveryResult(BaseModel):
    """Population-calibrated recovery for a manually logged day.

    Used when there is no ring night and no personal baseline: each
    logged metric is scored against fixed or demographic references.
    """

    sleep_score: Optional[int] = Field(None, ge=0, le=100, description="Sleep minutes vs. 8h")
    hrv_score: Optional[int] = Field(None, ge=0, le=100)
    rhr_score: Optional[int] = Field(None, ge=0, le=100)
    recovery_score: int = Field(..., ge=0, le=100, description="Mean of the available scores")
    is_fallback: bool = Field(
        False,
        description="True when the day had no usable metric",
    )
