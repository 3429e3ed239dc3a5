"""
Configuration Module
====================

Environment settings and sync configuration resolution using Pydantic.

Settings is a one-time snapshot of the process environment. The resolvers
turn it into the validated DatabaseConfig and ApiConfig values that the
pipeline stages receive; no stage reads the environment itself.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from user_sync.core import ConfigurationException


# ========== Constants ==========

DEFAULT_DB_PORT = 3306
MAX_DB_PORT = 65535
API_TIMEOUT_SECONDS = 5.0
USERS_QUERY = "SELECT id, name, email, created_at FROM users"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Sync settings loaded from environment variables.

    Required values are not enforced here; the resolvers below own that
    so a missing credential surfaces as a ConfigurationException.
    """

    # ========== Database ==========
    db_host: str = Field(default="", description="MySQL host (driver default when empty)")
    db_user: str = Field(default="", description="MySQL user")
    db_password: SecretStr = Field(default=SecretStr(""), description="MySQL password")
    db_name: str = Field(default="", description="MySQL database name")
    db_port: Optional[str] = Field(
        default=None,
        description="MySQL port, raw text; validated by resolve_database_config"
    )

    # ========== Third-party API ==========
    api_url: str = Field(default="", description="Endpoint receiving the user batch")
    api_key: Optional[SecretStr] = Field(
        default=None,
        description="Bearer token sent as the Authorization header"
    )

    # ========== Logging ==========
    log_level: str = Field(default="INFO", description="Root logging level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is one of the stdlib level names."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


def load_settings() -> Settings:
    """
    Snapshot the environment once at process start.

    Raises:
        ConfigurationException: If a setting fails validation
    """
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigurationException(f"Invalid settings: {e}") from e


# ========== Resolved configuration ==========

@dataclass(frozen=True)
class DatabaseConfig:
    """Connection parameters for the users database."""
    host: str
    user: str
    password: str = field(repr=False)
    database: str
    port: int = DEFAULT_DB_PORT


@dataclass(frozen=True)
class ApiConfig:
    """Target endpoint for the user batch."""
    url: str
    api_key: Optional[str] = field(default=None, repr=False)


def _parse_port(raw: Optional[str]) -> int:
    """Parse DB_PORT, defaulting when absent or blank."""
    if raw is None or not raw.strip():
        return DEFAULT_DB_PORT

    value = raw.strip()
    if not (value.isascii() and value.isdigit()):
        raise ConfigurationException(
            f"DB_PORT must be a non-negative integer, got {raw!r}"
        )

    port = int(value)
    if port > MAX_DB_PORT:
        raise ConfigurationException(
            f"DB_PORT must not exceed {MAX_DB_PORT}, got {port}"
        )
    return port


def resolve_database_config(settings: Settings) -> DatabaseConfig:
    """
    Build the database configuration.

    DB_HOST and DB_NAME are passed through unchecked.

    Args:
        settings: Environment snapshot

    Returns:
        DatabaseConfig

    Raises:
        ConfigurationException: If user or password is empty, or the port is malformed
    """
    password = settings.db_password.get_secret_value()
    if not settings.db_user or not password:
        raise ConfigurationException(
            "Database credentials must be set via environment variables"
        )

    return DatabaseConfig(
        host=settings.db_host,
        user=settings.db_user,
        password=password,
        database=settings.db_name,
        port=_parse_port(settings.db_port),
    )


def resolve_api_config(settings: Settings) -> ApiConfig:
    """
    Build the API configuration.

    An empty API_KEY is treated as unset.

    Raises:
        ConfigurationException: If API_URL is empty
    """
    if not settings.api_url:
        raise ConfigurationException("API_URL environment variable is required")

    api_key = settings.api_key.get_secret_value() if settings.api_key else None
    return ApiConfig(url=settings.api_url, api_key=api_key or None)
