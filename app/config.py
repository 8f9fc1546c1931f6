# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   print(get_settings().MONGO_URI)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are validated once at startup, so a missing MONGO_URI or JWT_SECRET
# fails before the server ever binds a port.
# =============================================================================

import re
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LIFETIME_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_LIFETIME_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All request-handling code receives these through the AppContext;
    only the composer and the process entry point call get_settings().
    """

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the HTTP listener binds to"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    # -------------------------------------------------------------------------
    # MongoDB
    # -------------------------------------------------------------------------
    # Required - the server does not start without a reachable database

    MONGO_URI: str = Field(
        ...,
        description="MongoDB connection string (e.g., mongodb://localhost:27017/jobs-api)"
    )

    MONGO_DB_NAME: str | None = Field(
        default=None,
        description="Database name (defaults to the one in MONGO_URI, else 'jobs-api')"
    )

    MONGO_TIMEOUT_MS: int = Field(
        default=5000,
        ge=100,
        description="Server selection timeout used when connecting"
    )

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    JWT_SECRET: str = Field(
        ...,
        min_length=16,
        description="Secret key for signing bearer tokens (HS256)"
    )

    JWT_LIFETIME: str = Field(
        default="30d",
        description="Token lifetime, e.g. '30d', '12h', '3600'"
    )

    # -------------------------------------------------------------------------
    # Request pipeline
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated, '*' allows any)"
    )

    RATE_LIMIT_WINDOW_MS: int = Field(
        default=15 * 60 * 1000,
        ge=1,
        description="Rate limit window in milliseconds"
    )

    RATE_LIMIT_MAX: int = Field(
        default=100,
        ge=1,
        description="Requests allowed per client within one window"
    )

    TRUST_PROXY_HOPS: int = Field(
        default=1,
        ge=0,
        description="Number of reverse proxies trusted to set X-Forwarded-For"
    )

    BODY_LIMIT_KB: int = Field(
        default=100,
        ge=1,
        description="Maximum accepted JSON body size in kilobytes"
    )

    SWAGGER_FILE: str = Field(
        default="views/swagger.yaml",
        description="OpenAPI document served at /api-docs"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("JWT_LIFETIME")
    @classmethod
    def _check_lifetime(cls, value: str) -> str:
        if not _LIFETIME_PATTERN.match(value):
            raise ValueError("JWT_LIFETIME must look like '30d', '12h', '15m', '60s' or '3600'")
        return value

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def rate_limit_window_seconds(self) -> float:
        return self.RATE_LIMIT_WINDOW_MS / 1000

    @property
    def jwt_lifetime_seconds(self) -> int:
        """Convert JWT_LIFETIME ('30d', '12h', ...) to seconds."""
        amount, unit = _LIFETIME_PATTERN.match(self.JWT_LIFETIME).groups()
        return int(amount) * _LIFETIME_UNITS[unit]

    @property
    def body_limit_bytes(self) -> int:
        return self.BODY_LIMIT_KB * 1024

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()
