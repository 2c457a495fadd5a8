"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Persistence API Configuration
    parcel_api_base_url: str = Field(
        default="https://api.example.com",
        description="Base URL for the remote parcel persistence API"
    )
    parcel_api_token: str = Field(
        default="",
        description="Fallback bearer token when the caller sends none"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for read calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )

    # Parcel Defaults
    default_soil_type: str = Field(
        default="franco arenoso",
        description="Soil-type label attached to every saved parcel"
    )

    # Capture Sessions
    draft_session_ttl_minutes: int = Field(
        default=120,
        description="Minutes after which an abandoned draft is discarded"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=30,
        description="Maximum save requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Parcel Capture Service",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
