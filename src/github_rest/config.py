"""Configuration settings for the GitHub REST client."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitConfig(BaseModel):
    """Configuration for rate limit reporting.

    Controls thresholds used when classifying the last observed
    quota of a rate limit group.
    """

    healthy_threshold_pct: float = Field(
        default=50.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is HEALTHY",
    )
    warning_threshold_pct: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is WARNING (below healthy)",
    )
    critical_threshold_pct: float = Field(
        default=5.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is CRITICAL (below warning)",
    )


class LoggingConfig(BaseModel):
    """Optional file sink for the client's DEBUG request traces."""

    log_file: str | None = Field(
        default=None,
        description="Write traces to this file as well as stderr",
    )
    rotation: str = Field(
        default="10 MB",
        description="Size or age at which the trace file rotates",
    )
    retention: str = Field(
        default="7 days",
        description="How long rotated trace files are kept",
    )
    serialize: bool = Field(
        default=False,
        description="Write the trace file as JSON lines",
    )


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # Authentication
    # --------------------------------------------------------------------------
    github_token: str = Field(
        default="",
        description="GitHub access token (empty for anonymous access)",
    )

    # --------------------------------------------------------------------------
    # Endpoints
    # --------------------------------------------------------------------------
    api_url: str = Field(
        default="https://api.github.com/",
        description="Base URL for REST API calls",
    )
    upload_url: str = Field(
        default="https://uploads.github.com/",
        description="Base URL for release asset uploads",
    )
    download_url: str = Field(
        default="https://github.com/",
        description="Base URL for release asset and archive downloads",
    )
    api_version: str = Field(
        default="2022-11-28",
        description="Value of the X-GitHub-Api-Version header",
    )
    user_agent: str = Field(
        default="github-rest-client/0.1",
        description="User agent string for API requests",
    )

    # --------------------------------------------------------------------------
    # Transport
    # --------------------------------------------------------------------------
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Default HTTP timeout in seconds when the context has no deadline",
    )

    # --------------------------------------------------------------------------
    # Pagination
    # --------------------------------------------------------------------------
    default_per_page: int = Field(
        default=30,
        ge=1,
        le=100,
        description="Page size the API applies when none is requested",
    )
    max_per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Upper bound applied to requested page sizes",
    )

    # --------------------------------------------------------------------------
    # Application
    # --------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Console level for setup_logging_from_config callers",
    )

    rate_limit: RateLimitConfig = Field(
        default_factory=RateLimitConfig,
        description="Rate limit reporting configuration",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Trace file settings",
    )


@lru_cache
def get_settings() -> Settings:
    """Settings read once from the environment and reused."""
    return Settings()
