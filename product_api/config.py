"""
Product API — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types and ranges, and exposes a singleton `settings` object.
Who:   Imported by the database layer, the app factory, and the entry point.
When:  Loaded once at module import time; validated before the app starts.

Database target:
    The connection target is either a full DATABASE_URL or assembled from
    DB_HOST / DB_USER / DB_PASSWORD / DB_NAME / DB_PORT. DB_SSLMODE is handed
    to asyncpg as its `ssl` connect argument.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for a local PostgreSQL instance.
    Deployments override the DB_* values (or DATABASE_URL) per environment.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Full SQLAlchemy URL; when set, the DB_* parts below are ignored
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy URL, e.g. postgresql+asyncpg://user:pw@host:5432/db",
    )

    db_host: str = Field(default="localhost")
    db_user: str = Field(default="postgres")
    db_password: str = Field(default="yourpassword")
    db_name: str = Field(default="crud_db")
    db_port: int = Field(default=5432, ge=1, le=65535)

    # Valid: disable, allow, prefer, require, verify-ca, verify-full
    db_sslmode: str = Field(default="disable")

    # Pool sizing; total connections = pool_size + max_overflow
    db_pool_size: int = Field(default=10, ge=5, le=100)
    db_max_overflow: int = Field(default=10, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    @field_validator("db_sslmode")
    @classmethod
    def validate_sslmode(cls, v: str) -> str:
        """Ensures the TLS mode is one asyncpg understands."""
        valid_modes = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}
        lower = v.lower()
        if lower not in valid_modes:
            raise ValueError(f"Invalid db_sslmode '{v}'. Must be one of: {valid_modes}")
        return lower

    @property
    def sqlalchemy_url(self) -> URL:
        """The store connection target as a SQLAlchemy URL object."""
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            drivername="postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def connect_args(self) -> Dict[str, Any]:
        """
        Driver-level connect arguments.

        Only asyncpg receives the TLS mode; SQLite drivers reject unknown
        keyword arguments.
        """
        if self.sqlalchemy_url.get_backend_name() == "postgresql":
            return {"ssl": self.db_sslmode}
        return {}

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
        "extra": "ignore",
    }


# Singleton instance — imported throughout the application
settings = Settings()
