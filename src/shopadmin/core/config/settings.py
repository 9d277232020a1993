"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (local, test, development, staging, production)
- Environment variable loading for secrets
- Type validation and coercion
- Computed properties for derived values
- Caching for performance
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class AuthMode(StrEnum):
    """Authentication mode configuration.

    Determines how requests are authenticated:
    - LOCAL_JWT: Validate JWTs locally using shared secret
    - HEADER: Extract user from X-User-ID header (trusted gateway / development)
    - DISABLED: No authentication required
    """

    LOCAL_JWT = "local_jwt"
    HEADER = "header"
    DISABLED = "disabled"


class RestartStrategy(StrEnum):
    """How the process restart primitive restarts the application.

    - EXEC: Replace the current process image with a fresh interpreter
    - SIGNAL: Send SIGHUP to the parent process (gunicorn master reload)
    - TERMINATE: Send SIGTERM to this process and let the supervisor restart it
    """

    EXEC = "exec"
    SIGNAL = "signal"
    TERMINATE = "terminate"


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Shop Admin Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1/shop-admin"
    cors_origins: list[str] = []


class JwtSettings(BaseModel):
    """JWT token settings."""

    algorithm: str = "HS256"


class AuthHeaderSettings(BaseModel):
    """Header-based auth settings."""

    user_id: str = "X-User-ID"
    roles: str = "X-User-Roles"
    permissions: str = "X-User-Permissions"


class AuthJwtValidationSettings(BaseModel):
    """JWT validation settings."""

    issuer: str | None = None
    audience: list[str] = []


class AuthSettings(BaseModel):
    """Authentication configuration settings."""

    mode: str = "local_jwt"
    jwt: JwtSettings = JwtSettings()
    headers: AuthHeaderSettings = AuthHeaderSettings()
    jwt_validation: AuthJwtValidationSettings = AuthJwtValidationSettings()


class RedisSettings(BaseModel):
    """Redis configuration settings."""

    host: str = "localhost"
    port: int = 6379
    user: str | None = None  # Redis ACL username (Redis 6.0+)
    cache_db: int = 0
    max_connections: int = 20
    key_prefix: str = "shop"  # Application cache namespace


class QueryCacheSettings(BaseModel):
    """Second-level (query result) cache settings."""

    enabled: bool = False
    key_prefix: str = "dbcache"
    ttl: int = 300


class DatabaseSettings(BaseModel):
    """PostgreSQL database configuration settings."""

    enabled: bool = True
    host: str = "localhost"
    port: int = 5432
    name: str = "shop"
    user: str | None = None
    min_pool_size: int = 1
    max_pool_size: int = 10
    command_timeout: float = 300.0  # VACUUM FULL can be slow
    ssl: bool = False
    allow_shrink: bool = True
    query_cache: QueryCacheSettings = QueryCacheSettings()


class MemoryCacheSettings(BaseModel):
    """Process-local memory cache settings."""

    scope: str = "Shop"
    default_ttl: float | None = None


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class NotificationSettings(BaseModel):
    """Flash notification settings."""

    key_prefix: str = "flash"
    ttl: int = 300
    max_items: int = 50


class MaintenanceSettings(BaseModel):
    """Maintenance action settings."""

    restart_strategy: str = "exec"
    gc_settle_delay: float = 0.5  # Seconds to wait after a GC cycle
    fallback_redirect_url: str = "/admin"
    memory_cache: MemoryCacheSettings = MemoryCacheSettings()
    notifications: NotificationSettings = NotificationSettings()


class LocalizationSettings(BaseModel):
    """Localization settings."""

    culture: str = "en"
    resources_file: str | None = None


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Environment variables
    2. .env file (secrets only)
    3. Environment-specific YAML files (config/environments/{APP_ENV}/)
    4. Base YAML files (config/base/)
    5. Default values in code

    Environment variables can override any setting using the nested delimiter '__'.
    For example: REDIS__HOST=prod-redis overrides redis.host.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    # =========================================================================
    # Environment Selection (from .env)
    # =========================================================================
    APP_ENV: str = "development"

    # =========================================================================
    # Nested Configuration Sections (from YAML)
    # =========================================================================
    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    auth: AuthSettings = AuthSettings()
    redis: RedisSettings = RedisSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    maintenance: MaintenanceSettings = MaintenanceSettings()
    localization: LocalizationSettings = LocalizationSettings()

    # =========================================================================
    # Secrets (from .env only - never in YAML)
    # =========================================================================
    JWT_SECRET_KEY: str = ""
    REDIS_PASSWORD: str = ""
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
        """Customize settings loading order.

        Priority (highest to lowest):
        1. init_settings - Values passed to Settings()
        2. env_settings - Environment variables
        3. dotenv_settings - .env file (secrets)
        4. yaml_settings - YAML files (base + environment)
        5. file_secret_settings - Docker secrets
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Computed Fields
    # =========================================================================

    @property
    def auth_mode_enum(self) -> AuthMode:
        """Get auth mode as enum with validation."""
        try:
            return AuthMode(self.auth.mode.lower())
        except ValueError:
            msg = (
                f"Invalid auth mode: {self.auth.mode}. "
                f"Must be one of: {', '.join(m.value for m in AuthMode)}"
            )
            raise ValueError(msg) from None

    @property
    def restart_strategy_enum(self) -> RestartStrategy:
        """Get restart strategy as enum with validation."""
        try:
            return RestartStrategy(self.maintenance.restart_strategy.lower())
        except ValueError:
            msg = (
                f"Invalid restart strategy: {self.maintenance.restart_strategy}. "
                f"Must be one of: {', '.join(s.value for s in RestartStrategy)}"
            )
            raise ValueError(msg) from None

    @property
    def redis_cache_url(self) -> str:
        """Build Redis cache connection URL with optional authentication.

        URL format: redis://[user:password@]host:port/db
        """
        auth_part = ""
        if self.redis.user and self.REDIS_PASSWORD:
            auth_part = f"{self.redis.user}:{self.REDIS_PASSWORD}@"
        elif self.REDIS_PASSWORD:
            auth_part = f":{self.REDIS_PASSWORD}@"
        elif self.redis.user:
            auth_part = f"{self.redis.user}@"

        return (
            f"redis://{auth_part}{self.redis.host}:{self.redis.port}"
            f"/{self.redis.cache_db}"
        )

    @property
    def database_url(self) -> str:
        """Build PostgreSQL connection URL (without password).

        URL format: postgresql://[user@]host:port/database
        """
        auth_part = f"{self.database.user}@" if self.database.user else ""
        return (
            f"postgresql://{auth_part}{self.database.host}:"
            f"{self.database.port}/{self.database.name}"
        )

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """Check if running in a non-production environment.

        Returns True for local, test, and development environments where
        API documentation and detailed error messages should be enabled.
        """
        return self.APP_ENV in ("local", "test", "development")

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Using lru_cache ensures settings are only loaded once,
    improving performance and consistency.
    """
    return Settings()
