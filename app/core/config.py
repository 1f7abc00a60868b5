"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).  The scoring
engine never reads these directly; the API layer turns them into
:class:`~app.engine.readiness.ReadinessConfig` and
:class:`~app.engine.load.LoadConfig` instances.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Recovery & Training-Load Scoring Engine"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = []

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Readiness
    READINESS_BASELINE_DAYS: int = 30
    READINESS_MIN_BASELINE_DAYS: int = 5
    TEMPERATURE_ELEVATED_THRESHOLD: float = 0.8
    RESPIRATORY_ELEVATED_DELTA: float = 1.5

    # Training load
    ACWR_ACUTE_DAYS: int = 7
    ACWR_CHRONIC_DAYS: int = 42

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
