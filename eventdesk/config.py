"""Deployment configuration loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEVELOPMENT_SECRET_KEY = "insecure-development-key"


class EventdeskConfig(BaseSettings):
    """Values that differ between deployments.

    Only debug runs may go without DJANGO_SECRET_KEY; they get a fixed
    development key.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    secret_key: str = Field(default="", validation_alias="DJANGO_SECRET_KEY", description="Django secret key")
    debug: bool = Field(default=False, validation_alias="DJANGO_DEBUG", description="Debug mode")
    allowed_hosts: Annotated[list[str], NoDecode] = Field(
        default=["localhost", "127.0.0.1"],
        validation_alias="DJANGO_ALLOWED_HOSTS",
        description="Comma-separated host names",
    )
    database_path: str | None = Field(
        default=None, validation_alias="DATABASE_PATH", description="SQLite database file"
    )
    time_zone: str = Field(
        default="UTC", validation_alias="TIME_ZONE", description="Zone for zone-less event dates"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL", description="Logging level")

    @field_validator("allowed_hosts", mode="before")
    @classmethod
    def split_hosts(cls, v):
        if isinstance(v, str):
            return [host.strip() for host in v.split(",") if host.strip()]
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @model_validator(mode="after")
    def require_secret_key(self) -> "EventdeskConfig":
        self.secret_key = self.secret_key.strip()
        if not self.secret_key:
            if not self.debug:
                raise ValueError("DJANGO_SECRET_KEY must be set unless DJANGO_DEBUG is on")
            self.secret_key = DEVELOPMENT_SECRET_KEY
        return self


@lru_cache
def get_config() -> EventdeskConfig:
    """Get cached deployment configuration."""
    return EventdeskConfig()
