# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single frozen Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are validated once at startup and never mutated afterwards.
# Services receive the instance at construction time instead of reading
# globals on every call.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    The model is frozen: assigning to a field after construction raises.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Tables and Buckets
    # -------------------------------------------------------------------------

    BOOKINGS_TABLE: str = Field(default="bookings")
    REVIEWS_TABLE: str = Field(default="reviews")
    CONTACT_TABLE: str = Field(default="contact_messages")

    PAYMENT_SCREENSHOT_BUCKET: str = Field(
        default="payment-screenshots",
        description="Public storage bucket for payment screenshots"
    )

    # -------------------------------------------------------------------------
    # Upload Settings
    # -------------------------------------------------------------------------

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum payment screenshot size in MB"
    )

    ALLOWED_IMAGE_TYPES: str = Field(
        default="image/jpeg,image/png",
        description="Allowed screenshot MIME types (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Notification Settings
    # -------------------------------------------------------------------------
    # RESEND_API_KEY is optional: without it the relay skips email and only
    # returns the WhatsApp deep link.

    RESEND_API_KEY: str | None = Field(
        default=None,
        description="Resend API key for booking notification emails"
    )

    RESEND_API_URL: str = Field(
        default="https://api.resend.com/emails",
        description="Resend send-email endpoint"
    )

    NOTIFICATION_FROM_EMAIL: str = Field(
        default="CosmOracle <onboarding@resend.dev>",
        description="Sender used for notification emails"
    )

    ADMIN_EMAIL: str = Field(
        default="niyati.nivriti@gmail.com",
        description="Recipient of booking notification emails"
    )

    ADMIN_WHATSAPP_NUMBER: str = Field(
        default="916230016403",
        pattern=r"^\d{8,15}$",
        description="Operator WhatsApp number (country code, digits only)"
    )

    NOTIFICATION_RELAY_URL: str | None = Field(
        default=None,
        description=(
            "URL of a deployed notification relay. When unset, the booking "
            "workflow calls the in-process relay directly."
        )
    )

    HTTP_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for outbound notification HTTP calls"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    CONFIRMATION_PATH: str = Field(
        default="/thank-you",
        description="Where the client is sent after a successful booking"
    )

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        frozen=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:5173, https://cosmoracle.in" -> ["http://localhost:5173", "https://cosmoracle.in"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_image_types_list(self) -> list[str]:
        """Parse ALLOWED_IMAGE_TYPES into a list of lowercase MIME types."""
        return [t.strip().lower() for t in self.ALLOWED_IMAGE_TYPES.split(",") if t.strip()]

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def email_enabled(self) -> bool:
        return bool(self.RESEND_API_KEY)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
