"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field, model_validator


class AppConfig(BaseModel):
    """Application-level settings."""

    name: str = Field(default="six-cities", description="Application name")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Runtime environment"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="plain", description="Log format")
    file: str = Field(default="", description="Log file path (empty disables the file sink)")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./database.db",
        description="Database connection URL",
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=5, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def is_in_memory(self) -> bool:
        """True for SQLite URLs that never touch the filesystem."""
        return self.url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in self.url


class SecurityConfig(BaseModel):
    """Password hashing and plaintext password rules."""

    password_salt: str = Field(
        default="six-cities-dev-salt", description="Salt used when hashing passwords"
    )
    password_min_length: int = Field(default=6, description="Minimum plaintext password length")
    password_max_length: int = Field(default=12, description="Maximum plaintext password length")

    @model_validator(mode="after")
    def _check_bounds(self) -> SecurityConfig:
        if self.password_min_length > self.password_max_length:
            raise ValueError("password_min_length must not exceed password_max_length")
        return self


class UsersConfig(BaseModel):
    """Field limits applied to persisted users."""

    name_min_length: int = Field(default=1, description="Minimum user name length")
    name_max_length: int = Field(default=15, description="Maximum user name length")


class ConfigData(BaseModel):
    """Root configuration model mirroring the ``config`` section of config.yaml."""

    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    users: UsersConfig = Field(default_factory=UsersConfig)
