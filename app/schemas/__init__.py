"""Pydantic schemas for engine inputs, outputs and API requests."""

from app.schemas.activity import ActivityRecord
from app.schemas.physio import DailyBiometric, Demographic, ManualDailyMetric
from app.schemas.readiness import (
    ManualRecoveryResult,
    MetricDetail,
    ReadinessBreakdown,
    ReadinessDetails,
    ReadinessResult,
)
from app.schemas.requests import (
    ManualRecoveryRequest,
    ReadinessRequest,
    ResolveRequest,
    TrainingRequest,
)
from app.schemas.scores import (
    CompositeScore,
    DimensionComponent,
    DimensionDetail,
    ScoreComponent,
)
from app.schemas.sleep import SleepRecord
from app.schemas.training import TrainingDimensions, TrainingProfile

__all__ = [
    "ActivityRecord",
    "DailyBiometric",
    "Demographic",
    "ManualDailyMetric",
    "ManualRecoveryResult",
    "ManualRecoveryRequest",
    "MetricDetail",
    "ReadinessBreakdown",
    "ReadinessDetails",
    "ReadinessResult",
    "ReadinessRequest",
    "ResolveRequest",
    "TrainingRequest",
    "CompositeScore",
    "DimensionComponent",
    "DimensionDetail",
    "ScoreComponent",
    "SleepRecord",
    "TrainingDimensions",
    "TrainingProfile",
]
