"""Scoring engine — sleep score, biometric readiness, training load."""

from app.engine.load import LoadConfig, compute_consistency, compute_load
from app.engine.manual_recovery import compute_manual_recovery
from app.engine.readiness import ReadinessConfig, compute_readiness
from app.engine.sleep import SleepScoreConfig, compute_sleep_score
from app.engine.training_profile import ProfileConfig, compute_training_profile

__all__ = [
    "LoadConfig",
    "ProfileConfig",
    "ReadinessConfig",
    "SleepScoreConfig",
    "compute_consistency",
    "compute_load",
    "compute_manual_recovery",
    "compute_readiness",
    "compute_sleep_score",
    "compute_training_profile",
]
