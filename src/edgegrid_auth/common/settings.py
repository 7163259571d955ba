"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tool settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EDGEGRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credential source
    edgerc_path: str = Field(
        default="~/.edgerc",
        description="Path to the .edgerc credentials file",
    )
    section: str = Field(
        default="default",
        description="Section of the .edgerc file (or AKAMAI_<SECTION>_ env prefix)",
    )
    use_env: bool = Field(
        default=False,
        description="Try AKAMAI_* environment variables before the .edgerc file",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output",
    )

    # HTTP
    http_timeout: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
