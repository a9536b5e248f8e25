"""
Application Configuration Module

Type-safe settings for the Local Library catalog, loaded with Pydantic Settings.

Values are read from environment variables (case-insensitive) and fall back
to a `.env` file, then to the defaults below. Validation happens at startup,
so a bad LOG_LEVEL or ENVIRONMENT fails fast instead of at the first request.

Usage:
    from catalog.config import get_settings

    settings = get_settings()
    print(settings.database_url)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only the catalog's own concerns live here: where the store is, how the
    app logs, and what the app is called.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Local Library",
        description="Application name displayed in page titles and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (error details on the failure page)"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=3000,
        description="Port to bind the server to"
    )

    # -------------------------------------------------------------------------
    # Store Settings
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite:///./locallibrary.db",
        description="SQLAlchemy URL of the catalog store"
    )
    db_echo: bool = Field(
        default=False,
        description="Log every SQL statement issued by the store"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        """SQLite needs thread-sharing enabled for the worker pool."""
        return self.database_url.startswith("sqlite")

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Returns:
            The validated value (uppercase)

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    lru_cache makes this a process-wide singleton: the .env file is read once
    and every module shares the same validated instance.
    """
    return Settings()
