"""Process-level settings, read from NETCHAT_* environment variables or .env."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class NetchatSettings(BaseSettings):
    """
    Settings for the dispatch loop and logging.

    Environment variables:
        NETCHAT_ENVIRONMENT: "production" silences missing-renderer warnings
        NETCHAT_LOG_LEVEL: level for the ``netchat`` logger
        NETCHAT_CONFIG_FILE: renderer config file (YAML)
    """

    environment: str = "development"
    log_level: str = "INFO"
    config_file: str = "netchat_config.yaml"

    model_config = SettingsConfigDict(
        env_prefix="NETCHAT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"
