"""Application configuration using Pydantic Settings.

This module provides type-safe environment variable management
for the report service: API prefix, CORS origins, upload limits and
heatmap precision.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Attributes:
        APP_ENV: Application environment (development, staging, production).
        DEBUG: Enable debug mode.
        API_PREFIX: Prefix for all API routes.
        CORS_ORIGINS: Comma-separated list of allowed CORS origins.
        MAX_IMAGE_SIZE_BYTES: Largest accepted billboard photo, in bytes.
        HEATMAP_PRECISION: Decimal places used to bucket heatmap coordinates.
        CONTENT_ANALYSIS_ENABLED: Annotate submitted photos with a description.
        LOG_LEVEL: Minimum level written by the log sink.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Uploads (4 MiB keeps requests under common serverless payload limits)
    MAX_IMAGE_SIZE_BYTES: int = Field(default=4 * 1024 * 1024, gt=0)

    # Aggregation
    HEATMAP_PRECISION: int = Field(default=4, ge=0, le=10)

    # Content analysis
    CONTENT_ANALYSIS_ENABLED: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance.
    """
    return Settings()
