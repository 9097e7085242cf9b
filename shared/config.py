"""
Shared configuration management for the session access layer.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # External services
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_socket_timeout: float = Field(default=5.0, gt=0)


class SessionConfig(BaseConfig):
    """Token signing and session lifetime settings."""

    secret: str = Field(min_length=1)
    server_host: str = Field(default="localhost")
    lifetime_minutes: int = Field(default=60, gt=0)


def get_config(**overrides) -> SessionConfig:
    """Get session configuration, explicit overrides win over the environment."""
    return SessionConfig(**overrides)
