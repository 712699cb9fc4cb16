"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # iTunes Catalog Configuration
    itunes_api_base: str = Field(
        default="https://itunes.apple.com", description="Base URL of the iTunes Search API"
    )
    itunes_result_limit: int = Field(
        default=60, description="Maximum number of results requested per search"
    )
    itunes_timeout: float = Field(
        default=10.0, description="Timeout in seconds for iTunes API requests"
    )
    default_country: str = Field(
        default="us", description="Storefront used when the query names none"
    )

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to run the server on")
    log_level: str = Field(default="INFO", description="Logging level")
    cors_allow_origins: list[str] = Field(
        default=["*"], description="Origins allowed to call the API from a browser"
    )

    # Feature Flags
    enable_telemetry: bool = Field(default=True, description="Enable PostHog telemetry")

    # PostHog Configuration
    posthog_api_key: str | None = Field(None, description="PostHog API key for telemetry")
    posthog_host: str = Field(default="https://us.i.posthog.com", description="PostHog host URL")

    # Sentry Configuration
    sentry_dsn: str | None = Field(None, description="Sentry DSN for error tracking")
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Fraction of requests traced for performance monitoring"
    )

    # Application Metadata
    app_name: str = Field(default="iTunes-Artwork-Finder", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def resolved_default_country(self) -> str:
        """Default storefront code, lowercased, falling back to "us" when blank.

        Raises:
            ConfigurationError: If the configured code is not two letters
        """
        country = (self.default_country or "").strip().lower()
        if not country:
            return "us"
        if len(country) != 2 or not country.isalpha():
            raise ConfigurationError(
                f"DEFAULT_COUNTRY must be a two-letter storefront code, got {self.default_country!r}"
            )
        return country


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
