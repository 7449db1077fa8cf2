"""
Shared configuration management for the ACL decision engine.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="ACCESS_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Observability
    metrics_enabled: bool = Field(default=True)


class AclEngineConfig(BaseConfig):
    """Settings read by the access decision facade."""

    service_name: str = "acl"

    # Emit a debug event for every evaluated decision
    debug: bool = Field(default=False)


def get_config(service_name: str = "acl", **overrides) -> AclEngineConfig:
    """Get configuration for the engine."""
    return AclEngineConfig(service_name=service_name, **overrides)
