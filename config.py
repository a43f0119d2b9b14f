"""
Configuration management using Pydantic Settings.
Validates all environment variables at startup for fail-fast behavior.

Scoring tables and thresholds are not settings: they live in the
immutable core.traits.lexicon.EngineConfig.
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings with validation."""

    # Registry
    GENOMAD_API_URL: str = Field(
        default="https://genomad.vercel.app/api",
        description="Base URL of the Genomad registry API"
    )
    REGISTRY_TIMEOUT: int = Field(
        default=20,
        ge=5,
        le=120,
        description="Registry request timeout in seconds (5-120, default: 20)"
    )

    # Workspace holding SOUL.md / IDENTITY.md / TOOLS.md and skills/
    OPENCLAW_WORKSPACE: Optional[str] = Field(
        default=None,
        description="Agent workspace directory (defaults to the current directory)"
    )

    # Audit alerts (Resend)
    RESEND_API_KEY: Optional[str] = Field(
        default=None,
        description="Resend API key for block alerts"
    )
    NOTIFY_EMAIL_FROM: Optional[str] = Field(
        default=None,
        description="From email address for block alerts"
    )
    NOTIFY_EMAIL_TO: Optional[str] = Field(
        default=None,
        description="Audit inbox receiving block alerts"
    )

    # HTTP service
    FRONTEND_ORIGIN: str = Field(
        default="http://localhost:3000",
        description="Frontend origin for CORS (no wildcard allowed)"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v_upper

    @field_validator("GENOMAD_API_URL")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) URL; strip the trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("GENOMAD_API_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("FRONTEND_ORIGIN")
    @classmethod
    def validate_no_wildcard_origin(cls, v: str) -> str:
        """Prevent wildcard CORS origin."""
        if v == "*":
            raise ValueError(
                "FRONTEND_ORIGIN cannot be '*' (wildcard). "
                "Set explicit origin or leave unset for localhost:3000 default."
            )
        return v

    @property
    def alerts_enabled(self) -> bool:
        """Check if block alerts are fully configured."""
        return bool(
            self.RESEND_API_KEY
            and self.NOTIFY_EMAIL_FROM
            and self.NOTIFY_EMAIL_TO
        )


# Global settings instance
settings = Settings()
