"""Package configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """Score normalization parameters."""

    model_config = SettingsConfigDict(env_prefix="SCORING_")

    default_score: int = Field(default=5, ge=1, le=10)
    motor_age_factor: float = 0.8


class DiagnosisSettings(BaseSettings):
    """Single-subject diagnosis parameters."""

    model_config = SettingsConfigDict(env_prefix="DIAGNOSIS_")

    high_aptitude_count: int = 3
    moderate_aptitude_count: int = 3
    weak_ability_count: int = 2
    trainings_per_ability: int = 2


class AnalyticsSettings(BaseSettings):
    """Population analytics parameters."""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_")

    cohort_limit: int = 50
    strong_positive_threshold: float = 0.6
    negative_threshold: float = -0.4
    fetch_workers: int = Field(default=4, ge=1)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    diagnosis: DiagnosisSettings = Field(default_factory=DiagnosisSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
