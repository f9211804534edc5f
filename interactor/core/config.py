"""
Application configuration using pydantic-settings.
All environment variables are validated and typed.
"""

import os
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Build server (request queue)
    build_server_url: str

    # TeamCity REST API, e.g. https://teamcity.example.com/app/rest
    teamcity_url: str
    teamcity_username: str
    teamcity_password: str

    # Static JSON configuration files
    build_config_path: str = "build-config.json"
    job_config_path: str = "job-config.json"

    # Timeout for every outgoing HTTP call, in seconds
    http_timeout: float = 10.0

    log_level: str = "INFO"

    # Status endpoint
    status_host: str = "0.0.0.0"
    status_port: int = 8081

    @field_validator("build_server_url", "teamcity_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return str(value).strip().rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return str(value).strip().upper() or "INFO"

    model_config = {
        "env_file": os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton settings instance
settings = Settings()
