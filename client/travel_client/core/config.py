"""Configuration settings for the travel API client."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings with Pydantic validation."""

    # API settings
    api_base_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL of the travel booking REST API"
    )

    api_version: str = Field(
        default="v1",
        description="API version path segment"
    )

    api_token: Optional[str] = Field(
        default=None,
        description="Optional bearer token sent with every request"
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds"
    )

    # Cache settings
    cache_max_age_ms: int = Field(
        default=5 * 60 * 1000,
        gt=0,
        description="Maximum age of a cached resource category in milliseconds"
    )

    session_storage_dir: Optional[str] = Field(
        default=None,
        description="Directory for persisted store snapshots; in-memory when unset"
    )

    # Background refresh settings
    enable_background_refresh: bool = Field(
        default=False,
        description="Keep cached lists warm with a background worker"
    )

    background_refresh_interval_seconds: int = Field(
        default=240,
        ge=1,
        description="How often the background worker refreshes stale lists"
    )

    # Environment settings
    environment: str = Field(
        default="development",
        description="Application environment"
    )

    service_name: str = Field(
        default="travel-client",
        description="Service name reported in logs and traces"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so endpoint paths can be appended."""
        return v.rstrip("/")

    @property
    def api_url(self) -> str:
        """Return the versioned API root URL."""
        return f"{self.api_base_url}/{self.api_version}"

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TRAVEL_CLIENT_",
        "case_sensitive": False,
    }


# Global settings instance
settings = Settings()
