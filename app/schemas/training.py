"""
Training profile schemas.

The training profile groups five activity-derived dimensions:

- ``load``         acute:chronic workload ratio zone
- ``consistency``  variability of weekly active days
- ``endurance``    longest session vs. recent weekly longest
- ``intensity``    heart-rate zone distribution (polarisation)
- ``efficiency``   efficiency-factor trend (output per heart beat)

``data_quality`` tells the presentation layer how much history backs
the numbers: ``excellent``, ``good`` or ``limited``.
"""

from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.scores import DimensionDetail

DataQuality = Literal["excellent", "good", "limited"]

DIMENSION_NAMES = ["load", "consistency", "endurance", "intensity", "efficiency"]


class TrainingDimensions(BaseModel):
    """Per-dimension detail."""

    load: DimensionDetail
    consistency: DimensionDetail
    endurance: DimensionDetail
    intensity: DimensionDetail
    efficiency: DimensionDetail


class TrainingProfile(BaseModel):
    """All training dimensions plus a weighted overall score."""

    overall_score: int = Field(..., ge=0, le=100)
    data_quality: DataQuality
    dimensions: TrainingDimensions
