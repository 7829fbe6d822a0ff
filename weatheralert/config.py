"""
Weather Alert Service Configuration.

Pydantic Settings v2 — loads from .env, environment variables.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Application ──────────────────────────────────────────────────────
    app_name: str = "Weather Alert Service"
    app_version: str = "1.0.0"
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # ── Weather Source ───────────────────────────────────────────────────
    weather_api_url: str = Field(
        default=(
            "https://api.open-meteo.com/v1/forecast"
            "?latitude=52.52&longitude=13.41&current_weather=true"
        ),
        alias="WEATHER_API_URL",
    )
    weather_timeout_seconds: float = Field(default=10.0, alias="WEATHER_TIMEOUT_SECONDS")
    weather_mock_file: Optional[str] = Field(
        default=None, alias="WEATHER_MOCK_FILE",
        description="Read readings from this JSON file instead of the API",
    )

    # ── Redis ─────────────────────────────────────────────────────────────
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    redis_connect_timeout_seconds: float = Field(
        default=3.0, alias="REDIS_CONNECT_TIMEOUT_SECONDS"
    )

    # ── Scheduling ────────────────────────────────────────────────────────
    alert_interval_seconds: int = Field(default=60, alias="ALERT_INTERVAL_SECONDS")
    update_interval_seconds: int = Field(default=60, alias="UPDATE_INTERVAL_SECONDS")

    # ── Alerting ──────────────────────────────────────────────────────────
    alert_thresholds: dict[str, float] = Field(
        default_factory=dict, alias="ALERT_THRESHOLDS",
        description='Initial custom thresholds as JSON, e.g. {"wind_speed": 10}',
    )

    # ── Operational ────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")


settings = Settings()
