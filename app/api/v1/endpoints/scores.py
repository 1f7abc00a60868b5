"""
Recovery endpoints — sleep score, readiness, manual recovery and source
resolution.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_observer, get_readiness_config
from app.core.instrumentation import ScoringObserver
from app.engine.manual_recovery import compute_manual_recovery
from app.engine.readiness import ReadinessConfig, compute_readiness
from app.engine.sleep import compute_sleep_score
from app.engine.sources import ResolvedBiometrics, resolve_daily_biometric
from app.schemas.readiness import ManualRecoveryResult, ReadinessResult
from app.schemas.requests import ManualRecoveryRequest, ReadinessRequest, ResolveRequest
from app.schemas.scores import CompositeScore
from app.schemas.sleep import SleepRecord

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/sleep",
    summary="Score a single night of sleep.",
    response_model=CompositeScore,
)
def score_sleep(
    record: SleepRecord,
    observer: Optional[ScoringObserver] = Depends(get_observer),
):
    result = compute_sleep_score(record, observer=observer)
    logger.info("Sleep score computed: %s (%s)", result.total_score, result.label)
    return result


@router.post(
    "/readiness",
    summary="Score today's biometrics against the personal baseline.",
    response_model=ReadinessResult,
)
def score_readiness(
    body: ReadinessRequest,
    config: ReadinessConfig = Depends(get_readiness_config),
    observer: Optional[ScoringObserver] = Depends(get_observer),
):
    result = compute_readiness(
        body.today, body.history, body.demographic,
        config=config, observer=observer,
    )
    logger.info(
        "Readiness for %s: %s (%s)", body.today.date, result.score, result.status,
    )
    return result


@router.post(
    "/biometrics/resolve",
    summary="Resolve a day's biometrics from ring and manual sources.",
    response_model=ResolvedBiometrics,
)
def resolve_biometrics(body: ResolveRequest):
    return resolve_daily_biometric(body.day, body.ring_night, body.manual)


@router.post(
    "/manual-recovery",
    summary="Score a manually logged day against population references.",
    response_model=ManualRecoveryResult,
)
def score_manual_recovery(
    body: ManualRecoveryRequest,
    observer: Optional[ScoringObserver] = Depends(get_observer),
):
    result = compute_manual_recovery(body.metric, body.demographic, observer=observer)
    logger.info(
        "Manual recovery for %s (%s): %s",
        body.metric.date, body.metric.source, result.recovery_score,
    )
    return result
