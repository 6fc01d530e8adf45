"""Service configuration via environment variables."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings


class DatabaseType(str, Enum):
    """Storage backends selectable at startup."""
    POSTGRES = "postgres"
    MEMORY = "memory"


class Settings(BaseSettings):
    # Service ports
    host: str = "0.0.0.0"
    port: int = 8080
    health_port: int = 8081

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # JWT Auth
    jwt_secret: str = "secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 10
    bcrypt_rounds: int = 12

    # Database
    database_type: DatabaseType = DatabaseType.POSTGRES
    database_url: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = "password"
    postgres_database: str = "xm"
    db_pool_size: int = 10
    storage_timeout_seconds: float = 10.0

    # Events
    event_dispatch_concurrency: int = 32

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def known_log_format(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return v

    @field_validator("jwt_secret")
    @classmethod
    def secret_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("jwt_secret must not be empty")
        return v

    @field_validator("storage_timeout_seconds", "db_pool_size", "event_dispatch_concurrency")
    @classmethod
    def strictly_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @property
    def sqlalchemy_url(self) -> str:
        """Async SQLAlchemy URL, built from the postgres_* fields unless overridden."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_database}"
        )
