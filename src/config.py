"""Configuration settings for Hellowed."""

import logging
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when the startup configuration is missing or invalid."""


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = Field(..., ge=1, le=65535)
    max_body_size: int = Field(100 * 1024, ge=0)  # bytes, JSON bodies only

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Todos handler, as "module:attribute"
    todos_app: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="HELLOWED_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level


def load_settings(**overrides) -> Settings:
    """Build the settings once, letting explicit overrides win over the environment."""
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(problems) from e
