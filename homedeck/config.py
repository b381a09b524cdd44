"""
Centralized configuration management using Pydantic Settings.

Configuration is loaded from environment variables with sensible defaults.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SmartThingsConfig(BaseSettings):
    """SmartThings API configuration."""

    model_config = SettingsConfigDict(env_prefix="HOMEDECK_ST_")

    base_url: str = Field(
        default="https://api.smartthings.com/v1",
        description="SmartThings API base URL",
    )
    token: Optional[str] = Field(default=None, description="Personal access token")
    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")

    devices_cache_ttl: float = Field(
        default=600,
        description="Seconds to serve the cached device list before refetching",
    )
    status_cache_ttl: float = Field(
        default=60,
        description="Seconds to serve a cached device status before refetching",
    )
    default_component: str = Field(
        default="main",
        description="Component that commands are sent to",
    )

    @field_validator("token")
    @classmethod
    def blank_token_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class ServerConfig(BaseSettings):
    """HTTP server configuration for the UI layer."""

    model_config = SettingsConfigDict(env_prefix="HOMEDECK_SERVER_")

    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8765, description="Bind port")


class Settings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_prefix="HOMEDECK_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # General
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Nested configs
    smartthings: SmartThingsConfig = Field(default_factory=SmartThingsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


# Singleton settings instance
settings = Settings()
