"""
Configuration management for fleetctl.
Loads environment variables using Pydantic Settings.
"""

from typing import Optional
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from FLEET_* environment variables."""

    # Application
    APP_NAME: str = "fleetctl"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "WARNING"

    # Fleet API
    API_URL: str = "https://api.balena-cloud.com"
    API_VERSION: str = "v6"
    API_TOKEN: Optional[str] = None  # Session token or API key
    REQUEST_TIMEOUT: float = 30.0

    # Dashboard (used to build per-device links)
    DASHBOARD_URL: str = "https://dashboard.balena-cloud.com"

    # Terminology: True switches output to "fleet" wording
    V13: bool = False

    @model_validator(mode="before")
    @classmethod
    def strip_trailing_slashes(cls, values):
        """Normalize base URLs so paths can be appended with a single slash."""
        for key in ("API_URL", "DASHBOARD_URL"):
            if isinstance(values.get(key), str):
                values[key] = values[key].rstrip("/")
        return values

    model_config = SettingsConfigDict(
        env_prefix="FLEET_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
