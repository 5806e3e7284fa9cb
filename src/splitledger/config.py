"""Configuration management for SplitLedger."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ledger file used when the CLI is not given one
    ledger_path: Path | None = None

    # Display currency for groups that don't set one
    default_currency: str = "USD"

    # Reject malformed exact/percentage splits instead of tolerating them
    strict_splits: bool = False

    # Assistant context settings
    recent_transactions_limit: int = 20


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the SPLITLEDGER_* environment "
            f"variables and your .env file.\n"
            f"Error: {e}"
        ) from e
