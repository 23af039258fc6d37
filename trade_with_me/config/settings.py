"""Application settings with Pydantic validation."""

from functools import lru_cache
from typing import Literal
from urllib.parse import quote, urlsplit, urlunsplit

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from trade_with_me.config.constants import DEFAULT_API_BASE_URL


def to_sqlalchemy_url(url: str) -> str:
    """Rewrite a ``postgres://`` URL into the scheme SQLAlchemy accepts."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def mask_password(url: str) -> str:
    """Hide the password part of a connection URL."""
    parts = urlsplit(url)
    if parts.password is None:
        return url

    netloc = parts.hostname or ""
    if parts.port is not None:
        netloc = f"{netloc}:{parts.port}"
    netloc = f"{parts.username}:***@{netloc}"
    return urlunsplit(parts._replace(netloc=netloc))


class Settings(BaseSettings):
    """Settings loaded from environment variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Postgres credentials
    db_username: str = Field(
        default="trade_user",
        description="Database user",
    )
    db_password: SecretStr = Field(
        default=SecretStr("password_trade_123"),
        description="Database password",
    )
    db_host: str = Field(
        default="localhost",
        description="Database host",
    )
    db_port: int = Field(
        default=5432,
        ge=1,
        le=65535,
        description="Database port",
    )
    db_name: str = Field(
        default="trade_with_me",
        description="Database name",
    )
    database_url: str | None = Field(
        default=None,
        description="Full connection URL, overrides the individual DB_* values",
    )

    # Migrations
    schema_file: str = Field(
        default="schema.sql",
        description="File the schema is written to after migrating",
    )

    # Trade service
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the trade service used by the smoke test",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for the smoke test request",
    )

    # Environment
    environment: Literal["development", "production"] = Field(
        default="development",
        description="Environment mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def connection_url(self) -> str:
        """postgres://<user>:<password>@<host>:<port>/<dbname>"""
        if self.database_url:
            return self.database_url

        user = quote(self.db_username, safe="")
        password = quote(self.db_password.get_secret_value(), safe="")
        return f"postgres://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def sqlalchemy_url(self) -> str:
        return to_sqlalchemy_url(self.connection_url)

    @property
    def masked_connection_url(self) -> str:
        return mask_password(self.connection_url)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
