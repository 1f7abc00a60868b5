"""
Training endpoints — ACWR load, consistency and the full profile.
"""

import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_load_config, get_observer
from app.core.instrumentation import ScoringObserver
from app.engine.load import LoadConfig, compute_consistency, compute_load
from app.engine.training_profile import compute_training_profile
from app.schemas.requests import TrainingRequest
from app.schemas.scores import DimensionDetail
from app.schemas.training import TrainingProfile

logger = logging.getLogger(__name__)

router = APIRouter()


def _reference_date(body: TrainingRequest) -> datetime.date:
    return body.as_of or datetime.date.today()


@router.post(
    "/load",
    summary="Score the acute:chronic workload ratio.",
    response_model=DimensionDetail,
)
def score_load(
    body: TrainingRequest,
    config: LoadConfig = Depends(get_load_config),
    observer: Optional[ScoringObserver] = Depends(get_observer),
):
    return compute_load(body.activities, _reference_date(body), config, observer)


@router.post(
    "/consistency",
    summary="Score weekly training consistency.",
    response_model=DimensionDetail,
)
def score_consistency(
    body: TrainingRequest,
    config: LoadConfig = Depends(get_load_config),
    observer: Optional[ScoringObserver] = Depends(get_observer),
):
    return compute_consistency(body.activities, _reference_date(body), config, observer)


@router.post(
    "/profile",
    summary="Compute all training dimensions and the overall score.",
    response_model=TrainingProfile,
)
def score_profile(
    body: TrainingRequest,
    config: LoadConfig = Depends(get_load_config),
    observer: Optional[ScoringObserver] = Depends(get_observer),
):
    as_of = _reference_date(body)
    profile = compute_training_profile(body.activities, as_of, load_config=config, observer=observer)
    logger.info(
        "Training profile for %s: %s (%s data)", as_of, profile.overall_score, profile.data_quality,
    )
    return profile
