"""
Configuration management using Pydantic Settings.
Handles environment variables and application configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    url: str = Field(
        default="sqlite:///./chatfilter.db",
        description="Database URL (PostgreSQL in production)"
    )

    echo: bool = Field(
        default=False,
        description="Enable SQLAlchemy query logging"
    )
    pool_size: int = Field(
        default=10,
        description="Database connection pool size"
    )
    max_overflow: int = Field(
        default=20,
        description="Maximum overflow connections"
    )
    pool_timeout: int = Field(
        default=30,
        description="Connection pool timeout in seconds"
    )
    pool_recycle: int = Field(
        default=3600,
        description="Connection pool recycle time in seconds"
    )

    class Config:
        env_prefix = "DATABASE_"


class ModerationSettings(BaseSettings):
    """
    Fallback values for the chat moderation thresholds.

    The live values are administered in the ``configurations`` table; these
    are only used when no row exists or the stored value is unusable.
    """

    user_strikes_threshold: int = Field(
        default=3,
        description="Strikes a seller can accumulate before the account is blocked"
    )
    contact_score_penalty: int = Field(
        default=3,
        description="Points added to the contact score for suspicious patterns"
    )
    business_score_bonus: int = Field(
        default=15,
        description="Points added to the business score for clear commercial phrasing"
    )
    contact_penalty_heavy: int = Field(
        default=20,
        description="Points added to the contact score for explicit contact exchange"
    )
    minimum_contact_score: int = Field(
        default=8,
        description="Minimum contact score before a message counts as contact context"
    )
    score_difference_threshold: int = Field(
        default=5,
        description="Minimum margin of contact score over business score"
    )
    consecutive_numbers_limit: int = Field(
        default=7,
        description="Spelled-out numbers that look like a dictated phone number"
    )
    numbers_with_context_limit: int = Field(
        default=3,
        description="Spelled-out numbers that are suspicious next to contact words"
    )

    class Config:
        env_prefix = "MODERATION_"


class Settings(BaseSettings):
    """Main application settings."""

    # Application metadata
    app_name: str = "Chat Contact Filter"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "production"
    log_level: str = "INFO"

    # Database settings
    database: DatabaseSettings = DatabaseSettings()

    # Moderation defaults
    moderation: ModerationSettings = ModerationSettings()

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
