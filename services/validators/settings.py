"""
Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files
with validation and type conversion. Only the CLI reads these settings;
the helper functions take every parameter explicitly.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.

    Settings are loaded in this order of precedence:
    1. Environment variables
    2. .env file in current directory
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(
        default="json",
        description="Log output format (json, text)"
    )

    # Service-specific Configuration
    service_name: str = Field(
        default="cl-validators",
        description="Service name for logging and monitoring"
    )

    environment: str = Field(
        default="development",
        description="Environment name (development, staging, production)"
    )

    # Validator defaults used by the CLI
    password_level: str = Field(
        default="medium",
        description="Default password security level (low, medium, high)"
    )

    two_factor_length: int = Field(
        default=4,
        ge=4,
        le=8,
        description="Default number of digits for two-factor codes"
    )

    two_factor_timezone: str = Field(
        default="America/Santiago",
        description="IANA timezone used to compute two-factor minute stamps"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format is supported."""
        valid_formats = {"json", "text"}
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of: {', '.join(valid_formats)}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment name."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of: {', '.join(valid_envs)}")
        return v.lower()

    @field_validator("password_level")
    @classmethod
    def validate_password_level(cls, v):
        """Validate password level is a known security level."""
        valid_levels = {"low", "medium", "high"}
        if v.lower() not in valid_levels:
            raise ValueError(f"password_level must be one of: {', '.join(valid_levels)}")
        return v.lower()

    @field_validator("two_factor_timezone")
    @classmethod
    def validate_two_factor_timezone(cls, v):
        """Validate timezone exists in the IANA database."""
        v = v.strip()
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"two_factor_timezone is not a known timezone: {v}") from e
        return v

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to avoid re-reading configuration files
    on every function call.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()


# Convenience function to get settings
def settings() -> Settings:
    """Get application settings."""
    return get_settings()
