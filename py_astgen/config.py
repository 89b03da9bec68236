"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Only logging is configurable from the environment; generation
    parameters always come from the caller or the command line.
    """

    # Logging
    log_level: str = Field(default="WARNING", description="Log level")
    log_format: str = Field(
        default="plain", description="Logging format (plain or json)"
    )

    model_config = SettingsConfigDict(
        env_prefix="ASTGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
