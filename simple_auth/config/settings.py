"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

import re
from functools import lru_cache
from typing import Literal

from psycopg.conninfo import make_conninfo
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION = re.compile(r"(?:\d+(?:\.\d+)?(?:ms|s|m|h))+")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database connection
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "simple_service"
    db_user: str = "admin"
    db_password: str = "admin"
    db_ssl_mode: str = "disable"

    # Connection pool
    db_pool_min_conns: int = Field(default=1, ge=0)
    db_pool_max_conns: int = Field(default=10, ge=1)
    db_pool_max_conn_lifetime: float = Field(default=300.0, gt=0)  # seconds
    db_pool_max_conn_idle_time: float = Field(default=150.0, gt=0)  # seconds
    db_pool_timeout: float = Field(default=30.0, gt=0)  # wait for a free connection

    # Security settings
    bcrypt_cost: int = Field(default=10, ge=4, le=31)  # bcrypt work factor

    # Credential store backend: "postgres" or "memory" (non-durable)
    store_backend: Literal["postgres", "memory"] = "postgres"

    log_level: str = "INFO"

    @field_validator(
        "db_pool_max_conn_lifetime",
        "db_pool_max_conn_idle_time",
        "db_pool_timeout",
        mode="before",
    )
    @classmethod
    def parse_duration(cls, v: object) -> object:
        """Accept plain seconds ("300") or duration strings ("300s", "2m30s", "500ms")."""
        if not isinstance(v, str):
            return v
        value = v.strip()
        if _DURATION.fullmatch(value):
            return sum(
                float(amount) * _DURATION_UNITS[unit]
                for amount, unit in _DURATION_PART.findall(value)
            )
        return value

    @property
    def conninfo(self) -> str:
        """libpq connection string built from the db_* fields."""
        return make_conninfo(
            host=self.db_host,
            port=self.db_port,
            dbname=self.db_name,
            user=self.db_user,
            password=self.db_password,
            sslmode=self.db_ssl_mode,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
