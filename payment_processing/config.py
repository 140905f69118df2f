"""Application settings using Pydantic for environment-based configuration."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentSettings(BaseSettings):
    """Settings loaded from ``PAYMENTS_*`` environment variables."""

    # Provider credentials
    stripe_api_key: str = Field(
        default="sk_test_123456", description="Stripe secret API key (sk_...)"
    )
    paypal_api_key: str = Field(
        default="12345678901234567890123456789012",
        description="PayPal API key (32 characters)",
    )

    # Application Configuration
    app_name: str = Field(default="payment-processing", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Emit logs as JSON")

    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()


@lru_cache()
def get_settings() -> PaymentSettings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return PaymentSettings()
