"""
Configuration settings for the message service.

Uses Pydantic Settings to load environment variables for the PostgreSQL
connection (the standard libpq ``PG*`` variables), the HTTP listener,
logging, and the startup backoff policy.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="PGHOST")
    db_port: int = Field(5432, alias="PGPORT")
    db_name: str = Field("postgres", alias="PGDATABASE")
    db_user: str = Field("postgres", alias="PGUSER")
    db_password: str = Field("", alias="PGPASSWORD")
    db_sslmode: str = Field("disable", alias="PGSSLMODE")
    connect_timeout: int = Field(5, alias="PGCONNECT_TIMEOUT")
    pool_min_size: int = Field(1, alias="POOL_MIN_SIZE")
    pool_max_size: int = Field(10, alias="POOL_MAX_SIZE")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    app_host: str = Field("0.0.0.0", alias="APP_HOST")
    app_port: int = Field(8080, alias="APP_PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    send_strict_json: bool = Field(True, alias="SEND_STRICT_JSON")

    # Startup backoff (unset limits mean retry forever)
    backoff_initial_interval: float = Field(0.5, alias="BACKOFF_INITIAL_INTERVAL")
    backoff_multiplier: float = Field(1.5, alias="BACKOFF_MULTIPLIER")
    backoff_max_interval: float = Field(60.0, alias="BACKOFF_MAX_INTERVAL")
    backoff_max_attempts: Optional[int] = Field(None, alias="BACKOFF_MAX_ATTEMPTS")
    backoff_max_elapsed: Optional[float] = Field(None, alias="BACKOFF_MAX_ELAPSED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
