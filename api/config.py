"""
Configuration management for the flood risk API.
Handles environment variables and application settings.
"""

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # API Configuration
    app_name: str = "Flood Risk Intelligence API"
    app_version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS Configuration (comma-separated)
    cors_origins: str = "*"

    # Data provider configuration
    request_timeout: float = 30.0
    weather_past_days: int = 7
    weather_forecast_days: int = 7
    flood_past_days: int = 3
    flood_forecast_days: int = 7

    # Scoring configuration
    default_language: str = "en"
    strict_flood_date: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Normalize log level names."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
