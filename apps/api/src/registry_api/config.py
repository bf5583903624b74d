"""Configuration management for the User Registry API."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from registry_common.services.user_service import IdStrategy


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the API project directory (apps/api/.env).

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in apps/api/src/registry_api/config.py
    api_dir = Path(__file__).parent.parent.parent
    return str(api_dir / ".env")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "user-registry"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 5294
    api_reload: bool = True

    # Users
    id_strategy: IdStrategy = "counter"

    # Access gate
    auth_query_param: str = "authenticated"
    protected_prefix: str = "/users"

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
    )

    @property
    def docs_enabled(self) -> bool:
        """Interactive docs are only served in development."""
        return self.environment.lower() in {"development", "dev", "local"}


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
