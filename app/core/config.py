"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.kinetics.config import KineticsConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Caffeine Kinetics & Guidance Engine"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["Roberto Martelloni"]
    AUTHORS_EMAILS: List[str] = ["rmartelloni@gmail.com"]
    PROJECT_URL: str = ""

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "caffeine"

    # Kinetics engine defaults
    HALF_LIFE_HOURS: float = 5.0
    SLEEP_SAFE_MG: float = 50.0
    SLEEP_CAUTION_MG: float = 100.0
    JITTER_THRESHOLD_MG: float = 300.0
    NEXT_DOSE_ESTIMATE_MG: float = 95.0

    # User preference defaults (applied when no preferences row exists yet)
    DEFAULT_BEDTIME: str = "23:00"
    DEFAULT_DAILY_LIMIT_MG: float = 400.0
    DEFAULT_TIMEZONE: str = "UTC"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def database_url(self) -> str:
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")

    def kinetics_config(self) -> KineticsConfig:
        """Engine thresholds from the environment.

        Raises ``pydantic.ValidationError`` on misordered thresholds.
        """
        return KineticsConfig(
            half_life_hours=self.HALF_LIFE_HOURS,
            sleep_safe_mg=self.SLEEP_SAFE_MG,
            sleep_caution_mg=self.SLEEP_CAUTION_MG,
            jitter_threshold_mg=self.JITTER_THRESHOLD_MG,
            next_dose_estimate_mg=self.NEXT_DOSE_ESTIMATE_MG,
        )


# Global settings instance
settings = Settings()
