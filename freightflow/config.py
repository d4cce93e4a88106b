"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

_MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for verifying JWT bearer tokens", min_length=1
    )
    jwt_algorithm: str = Field(
        default="HS256", description="Algorithm used to sign JWT bearer tokens"
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )

    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to bucket dashboard time series by day",
    )
    app_version: str = Field(default="1.0.0", description="Version reported by /health")
    environment: str = Field(
        default="development", description="Deployment environment reported by /health"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    analytics_window_days: int = Field(
        default=30,
        gt=0,
        le=366,
        description="Number of days of history scanned by dashboard analytics queries",
    )
    analytics_row_limit: int = Field(
        default=5000,
        gt=0,
        description="Maximum number of shipment rows loaded to build chart series",
    )
    carrier_online_window_minutes: int = Field(
        default=15,
        gt=0,
        description="A carrier seen within this many minutes counts as online",
    )
    feed_default_page_size: int = Field(default=20, gt=0)
    feed_max_page_size: int = Field(
        default=100, gt=0, description="Upper bound for page_size and limit parameters"
    )

    notification_send_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single channel send before it is reported as failed",
    )
    health_check_timeout_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Upper bound for a single health indicator before it is reported unhealthy",
    )
    memory_rss_warning_bytes: int = Field(
        default=150 * _MIB,
        gt=0,
        description="Resident memory above which the memory indicator reports a warning",
    )
    memory_rss_critical_bytes: int = Field(
        default=300 * _MIB,
        gt=0,
        description="Resident memory above which the memory indicator is unhealthy",
    )
    system_memory_warning_percent: float = Field(
        default=85.0,
        gt=0,
        le=100,
        description="Host memory usage above which the system indicator reports a warning",
    )
    system_memory_critical_percent: float = Field(
        default=95.0,
        gt=0,
        le=100,
        description="Host memory usage above which the system indicator is unhealthy",
    )
    min_uptime_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Process uptime required before the service reports itself healthy",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @model_validator(mode="after")
    def _validate_thresholds(self) -> "Settings":
        if self.memory_rss_warning_bytes > self.memory_rss_critical_bytes:
            raise ValueError(
                "MEMORY_RSS_WARNING_BYTES must not exceed MEMORY_RSS_CRITICAL_BYTES"
            )
        if self.system_memory_warning_percent > self.system_memory_critical_percent:
            raise ValueError(
                "SYSTEM_MEMORY_WARNING_PERCENT must not exceed SYSTEM_MEMORY_CRITICAL_PERCENT"
            )
        if self.feed_default_page_size > self.feed_max_page_size:
            raise ValueError("FEED_DEFAULT_PAGE_SIZE must not exceed FEED_MAX_PAGE_SIZE")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
