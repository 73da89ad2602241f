"""Application settings and configuration.

This module defines all configuration options for the radio ratings service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_METADATA_URL = "https://d3d4yli4hf5bmh.cloudfront.net/metadatav2.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Radio Ratings", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Server binding for the uvicorn entry point
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")

    # Database configuration (SQLite or PostgreSQL, selected by URL)
    database_url: str = Field(default="sqlite:///./database.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_schema: bool = Field(default=True, alias="AUTO_CREATE_SCHEMA")

    # Anonymous listener identity
    forwarded_for_header: str = Field(default="x-forwarded-for", alias="FORWARDED_FOR_HEADER")
    fallback_client_address: str = Field(default="0.0.0.0", alias="FALLBACK_CLIENT_ADDRESS")

    # Now-playing metadata source
    metadata_url: str = Field(default=DEFAULT_METADATA_URL, alias="METADATA_URL")
    metadata_timeout_seconds: float = Field(default=10.0, alias="METADATA_TIMEOUT_SECONDS")

    # Static player assets; mounted only if the directory exists
    static_dir: str = Field(default="public", alias="STATIC_DIR")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def effective_database_url(self) -> str:
        """Return the database URL with PostgreSQL URLs pinned to psycopg.

        Hosting providers commonly hand out ``postgres://`` or bare
        ``postgresql://`` URLs; SQLAlchemy needs the driver spelled out.

        Returns:
            Database URL suitable for ``sqlalchemy.create_engine``
        """
        url = self.database_url.strip()
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return "postgresql+psycopg://" + url[len(prefix):]
        return url

    @property
    def uses_postgres(self) -> bool:
        """Return True when the configured store is PostgreSQL."""
        return self.effective_database_url.startswith("postgresql")


settings = Settings()
