"""Application configuration using Pydantic Settings with YAML support.

Configuration is organized by domain into nested models. Values come from
YAML files under ``config/`` (base plus environment overrides), the ``.env``
file and environment variables. Secrets are only ever read from the
environment.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING
from urllib.parse import quote_plus

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Restaurant Review Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = []


class JwtSettings(BaseModel):
    """JWT token settings."""

    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    jwt: JwtSettings = JwtSettings()


class DatabaseSettings(BaseModel):
    """MongoDB configuration settings."""

    host: str = "localhost"
    port: int = 27017
    name: str = "restaurants"
    user: str | None = None
    auth_source: str = "admin"
    server_selection_timeout_ms: int = 5000
    max_pool_size: int = 50


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration.

    Limits use the slowapi/limits notation, e.g. ``5/15minutes``.
    """

    auth: str = "5/15minutes"
    storage_uri: str = "memory://"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class GeocodingSettings(BaseModel):
    """Nominatim geocoding client configuration."""

    url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "RestaurantApp/1.0"
    accept_language: str = "es,en"
    timeout: float = 10.0


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest):
    1. Values passed to ``Settings()``
    2. Environment variables
    3. .env file
    4. Environment-specific YAML (config/environments/{APP_ENV}/)
    5. Base YAML (config/base/)
    6. Defaults in code

    Nested values can be overridden with the ``__`` delimiter, for example
    ``DATABASE__HOST=mongo``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    database: DatabaseSettings = DatabaseSettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    geocoding: GeocodingSettings = GeocodingSettings()

    # Secrets (environment only - never in YAML)
    JWT_SECRET_KEY: str = ""
    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def database_url(self) -> str:
        """Build the MongoDB connection URL.

        URL format: mongodb://[user:password@]host:port/?authSource=...
        """
        if self.database.user:
            credentials = quote_plus(self.database.user)
            if self.DATABASE_PASSWORD:
                credentials += f":{quote_plus(self.DATABASE_PASSWORD)}"
            return (
                f"mongodb://{credentials}@{self.database.host}:{self.database.port}"
                f"/?authSource={self.database.auth_source}"
            )
        return f"mongodb://{self.database.host}:{self.database.port}"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
