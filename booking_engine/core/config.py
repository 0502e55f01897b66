from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOOKING_ENGINE_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "booking-engine"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Scheduling rules
    MAX_SERIES_OCCURRENCES: int = Field(default=50, gt=0)
    DEFAULT_CONFLICT_POLICY: Literal["block", "warn"] = "block"
    # Callers normalize all dates and times to this zone before calling the engine
    BUSINESS_TIMEZONE: str = "Asia/Bangkok"

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"
    ENABLE_METRICS: bool = True


settings = Settings()  # type: ignore


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return settings
