"""
Generic score value objects shared by all calculators.

- :class:`CompositeScore` — named weighted components plus a clamped total.
- :class:`DimensionDetail` — one scored dimension with display components,
  a trend and a human-readable suggestion.

Scores are always in the closed interval [0, 100].  ``is_fallback`` marks
a score that was produced by a neutral policy because no usable data was
available; presentation layers render it as a "no data" placeholder.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

DimensionTrend = Literal["improving", "stable", "declining"]


class ScoreComponent(BaseModel):
    """A single weighted sub-score."""

    score: float = Field(..., ge=0.0, le=100.0, description="Component score 0-100")
    weight: float = Field(..., ge=0.0, le=1.0, description="Fraction of the total (0-1)")


class CompositeScore(BaseModel):
    """Weighted aggregate of named components."""

    total_score: int = Field(..., ge=0, le=100, description="Weighted total, clamped to 0-100")
    components: dict[str, ScoreComponent]
    label: Optional[str] = Field(
        None,
        description="Display band of the total (sleep: optimal, good, pay_attention)",
    )


class DimensionComponent(BaseModel):
    """A display row contributing to a :class:`DimensionDetail`."""

    name: str
    display_value: Union[str, float]
    contribution: float = Field(
        0.0,
        description="Points contributed to the dimension score (0 for display-only rows)",
    )


class DimensionDetail(BaseModel):
    """A scored dimension with supporting context."""

    score: int = Field(..., ge=0, le=100)
    components: list[DimensionComponent] = Field(default_factory=list)
    trend: DimensionTrend = "stable"
    suggestion: str = ""
    metrics: dict[str, float] = Field(
        default_factory=dict,
        description="Raw values behind the score (e.g. ratio, stdev)",
    )
    is_fallback: bool = Field(
        False,
        description="True when the score is a neutral default for missing data",
    )
