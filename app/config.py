# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Postgres tables and Storage buckets are both reached through Supabase

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    STORAGE_BUCKET: str = Field(
        default="contest-media",
        description="Storage bucket holding contest photos and videos"
    )

    # -------------------------------------------------------------------------
    # OpenAI / Chat Assistant
    # -------------------------------------------------------------------------

    OPENAI_API_KEY: str = Field(
        ...,
        description="OpenAI API key for the shop chat assistant"
    )

    OPENAI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Model used for chat completions"
    )

    AI_TEMPERATURE: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for the chat assistant"
    )

    AI_MAX_HISTORY: int = Field(
        default=10,
        ge=0,
        le=50,
        description="Max previous chat messages forwarded to the model"
    )

    # -------------------------------------------------------------------------
    # Payment Gateway (Midtrans Snap)
    # -------------------------------------------------------------------------

    MIDTRANS_SERVER_KEY: str = Field(
        default="",
        description="Midtrans server key used as basic-auth username"
    )

    MIDTRANS_IS_PRODUCTION: bool = Field(
        default=False,
        description="Use the production Snap endpoint instead of the sandbox"
    )

    # -------------------------------------------------------------------------
    # Shipping Rates (RajaOngkir / Komerce)
    # -------------------------------------------------------------------------

    RAJAONGKIR_API_KEY: str = Field(
        default="",
        description="API key sent in the `key` header"
    )

    RAJAONGKIR_BASE_URL: str = Field(
        default="https://rajaongkir.komerce.id/api/v1",
        description="Base URL of the shipping-rate API"
    )

    SHIPPING_ORIGIN_ID: str = Field(
        default="",
        description="Destination ID of the shop, used as shipping origin"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing tokens"
    )

    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="Signing algorithm for access tokens"
    )

    ADMIN_USERNAME: str = Field(
        default="admin",
        description="Static admin username"
    )

    ADMIN_PASSWORD: str = Field(
        default="",
        description="Static admin password (admin login is disabled while empty)"
    )

    ADMIN_TOKEN_EXPIRE_MINUTES: int = Field(
        default=480,
        ge=1,
        description="Lifetime of admin tokens"
    )

    USER_TOKEN_EXPIRE_MINUTES: int = Field(
        default=10080,
        ge=1,
        description="Lifetime of user and judge tokens"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Upload Settings
    # -------------------------------------------------------------------------

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Maximum contest media size in MB"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def max_upload_size_bytes(self) -> int:
        """Convert MB to bytes for file size validation."""
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def midtrans_snap_url(self) -> str:
        """Snap transaction endpoint for the configured environment."""
        if self.MIDTRANS_IS_PRODUCTION:
            return "https://app.midtrans.com/snap/v1/transactions"
        return "https://app.sandbox.midtrans.com/snap/v1/transactions"

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
