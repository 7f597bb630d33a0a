"""
Application Configuration
Manages environment variables and application settings using Pydantic Settings.

This module loads configuration from .env file and provides type-safe access
to all RexOS settings: the local key-value store, note auto-save timing,
persistence retry policy, logging and report export.

Every setting has a default so the package imports cleanly without a .env file.
Environment variables use the REXOS_ prefix, e.g. REXOS_DATABASE_URL.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are loaded from .env file or environment variables.
    Optional settings have default values.
    """

    # Local Key-Value Store
    DATABASE_URL: str = "sqlite:///rexos.db"  # SQLAlchemy URL of the local blob store
    STORAGE_KEY: str = "rexos_data"  # Single key the aggregate is stored under

    # Note Auto-Save
    NOTE_SAVE_DELAY_SECONDS: float = 1.0  # Inactivity window before a note is saved

    # Persistence Retry Policy
    PERSIST_MAX_RETRIES: int = 3  # Retries after a failed save (0 disables retrying)
    PERSIST_BACKOFF_BASE_SECONDS: float = 2.0  # Delay before retry n is base ** n

    # Logging
    LOG_DIR: str = "logs"  # Directory for rotating log files
    FILE_LOGGING: bool = False  # Write log files in addition to the console

    # Report Export
    REPORT_DIR: str = "reports"  # Where exported PDF reports are written

    # Application Settings
    PROJECT_NAME: str = "RexOS"
    DEBUG: bool = False  # Echo SQL statements and log at DEBUG level

    model_config = SettingsConfigDict(
        env_prefix="REXOS_",  # REXOS_DATABASE_URL, REXOS_DEBUG, ...
        env_file=".env",  # Load from .env file
        env_file_encoding="utf-8",  # UTF-8 encoding
        case_sensitive=False  # Case-insensitive env vars
    )


# Global settings instance
# Holds defaults only; components receive explicit values where tests need them.
settings = Settings()
