"""
Shared API dependencies.

Reusable FastAPI dependencies that build engine configuration from the
application settings and provide the instrumentation observer.
"""

from typing import Optional

from fastapi import Depends

from app.core.config import Settings, settings
from app.core.instrumentation import LoggingObserver, ScoringObserver
from app.engine.load import LoadConfig
from app.engine.readiness import ReadinessConfig


def get_settings() -> Settings:
    return settings


def get_readiness_config(cfg: Settings = Depends(get_settings)) -> ReadinessConfig:
    """Readiness configuration derived from settings."""
    return ReadinessConfig(
        baseline_days=cfg.READINESS_BASELINE_DAYS,
        min_baseline_days=cfg.READINESS_MIN_BASELINE_DAYS,
        temperature_elevated_threshold=cfg.TEMPERATURE_ELEVATED_THRESHOLD,
        respiratory_elevated_delta=cfg.RESPIRATORY_ELEVATED_DELTA,
    )


def get_load_config(cfg: Settings = Depends(get_settings)) -> LoadConfig:
    """Training-load configuration derived from settings."""
    return LoadConfig(acute_days=cfg.ACWR_ACUTE_DAYS, chronic_days=cfg.ACWR_CHRONIC_DAYS)


def get_observer(cfg: Settings = Depends(get_settings)) -> Optional[ScoringObserver]:
    """Trace scoring internals only when running in debug mode."""
    if cfg.DEBUG:
        return LoggingObserver()
    return None
