"""
Settings for the wabridge gateway.

Simple, reliable environment variable configuration for the REST gateway and
the messaging bridge it forwards into.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version & General Configuration
        # ================================================================
        self.version: str = _get_version_from_pyproject()
        self.port: int = int(os.getenv("PORT", "8000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # ================================================================
        # Messaging Bridge Configuration
        # ================================================================
        self.bridge_url: str = os.getenv("BRIDGE_URL", "http://localhost:8081")
        self.bridge_api_key: str | None = os.getenv("BRIDGE_API_KEY")
        self.bridge_timeout: int = int(os.getenv("BRIDGE_TIMEOUT", "30"))

        # ================================================================
        # Message Log (Optional)
        # ================================================================
        self.database_url: str | None = os.getenv("DATABASE_URL")
        self.message_page_size: int = int(os.getenv("MESSAGE_PAGE_SIZE", "25"))

        # ================================================================
        # Event Webhook (Optional)
        # ================================================================
        self.webhook_url: str | None = os.getenv("WEBHOOK_URL")
        self.webhook_allowed_events: list[str] = _split_csv(
            os.getenv("WEBHOOK_ALLOWED_EVENTS", "all")
        )

        # ================================================================
        # Bulk Dispatch
        # ================================================================
        self.bulk_default_delay_ms: int = int(os.getenv("BULK_DEFAULT_DELAY_MS", "1000"))

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        if self.bulk_default_delay_ms < 0:
            raise ValueError("BULK_DEFAULT_DELAY_MS must not be negative")
        if self.message_page_size < 1:
            raise ValueError("MESSAGE_PAGE_SIZE must be at least 1")

    @property
    def has_database(self) -> bool:
        """Check if the message log database is configured."""
        return self.database_url is not None

    @property
    def has_webhook(self) -> bool:
        """Check if event forwarding to a webhook is configured."""
        return self.webhook_url is not None

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"


# Global settings instance
settings = Settings()
