"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: open connections, build the maintenance service
- Application shutdown: close connections
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import yaml

from shopadmin.auth.providers import initialize_auth_provider, shutdown_auth_provider
from shopadmin.cache.memory import MemoryCache
from shopadmin.cache.redis import (
    RedisCache,
    close_redis_pools,
    get_cache_client,
    init_redis_pools,
)
from shopadmin.core.config import Settings, get_settings
from shopadmin.core.i18n import Localizer
from shopadmin.database.connection import (
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from shopadmin.database.context import DataContext
from shopadmin.database.providers import PostgresDataProvider
from shopadmin.database.query_cache import QueryCache
from shopadmin.observability.logging import get_logger, setup_logging
from shopadmin.services.maintenance import (
    MaintenanceService,
    ProcessRestarter,
    SystemInfoCollector,
)
from shopadmin.services.notifications import FlashStore


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from typing import Any

    from fastapi import FastAPI
    from redis.asyncio import Redis

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Redis backs the application cache and notifications (non-critical)
    cache_client = await _init_cache()

    # Auth is critical - will raise on failure
    await _init_auth(settings)

    # Database is optional; without it database actions become no-ops
    data_context = await _init_database(settings, cache_client)

    localizer = _init_localizer(settings)
    memory_cache = MemoryCache(
        scope=settings.maintenance.memory_cache.scope,
        default_ttl=settings.maintenance.memory_cache.default_ttl,
    )

    app.state.memory_cache = memory_cache
    app.state.flash_store = FlashStore(
        client=cache_client,
        key_prefix=settings.maintenance.notifications.key_prefix,
        ttl=settings.maintenance.notifications.ttl,
        max_items=settings.maintenance.notifications.max_items,
    )
    app.state.maintenance_service = build_maintenance_service(
        settings,
        memory_cache=memory_cache,
        localizer=localizer,
        data_context=data_context,
        cache_client=cache_client,
    )

    logger.info("Application startup complete")


def build_maintenance_service(
    settings: Settings,
    *,
    memory_cache: MemoryCache,
    localizer: Localizer,
    data_context: DataContext | None = None,
    cache_client: Redis[Any] | None = None,
) -> MaintenanceService:
    """Wire the maintenance service from settings and live collaborators."""
    return MaintenanceService(
        app_cache=RedisCache(client=cache_client, prefix=settings.redis.key_prefix),
        memory_cache=memory_cache,
        restarter=ProcessRestarter(strategy=settings.restart_strategy_enum),
        localizer=localizer,
        info_collector=SystemInfoCollector(app_version=settings.app.version),
        data_context=data_context,
        gc_settle_delay=settings.maintenance.gc_settle_delay,
    )


async def _init_cache() -> Redis[Any] | None:
    """Initialize Redis cache and return client."""
    try:
        await init_redis_pools()
        return get_cache_client()
    except Exception:
        logger.exception("Failed to initialize Redis - continuing without cache")
        return None


async def _init_auth(settings: Settings) -> None:
    """Initialize auth provider (critical service)."""
    try:
        await initialize_auth_provider(settings)
        logger.info("Auth provider initialized", mode=settings.auth.mode)
    except Exception:
        logger.exception("Failed to initialize auth provider")
        raise


async def _init_database(
    settings: Settings,
    cache_client: Redis[Any] | None,
) -> DataContext | None:
    """Open the database pool and build the data context, if configured."""
    if not settings.database.enabled:
        logger.info("Database disabled - database maintenance unavailable")
        return None

    try:
        await init_database_pool()
    except Exception:
        logger.exception("Failed to initialize database - continuing without it")
        return None

    pool = get_database_pool()
    query_cache = None
    if settings.database.query_cache.enabled:
        query_cache = QueryCache(
            client=cache_client,
            prefix=settings.database.query_cache.key_prefix,
            ttl=settings.database.query_cache.ttl,
        )

    return DataContext(
        provider=PostgresDataProvider(
            pool, allow_shrink=settings.database.allow_shrink
        ),
        pool=pool,
        query_cache=query_cache,
    )


def _init_localizer(settings: Settings) -> Localizer:
    try:
        return Localizer.from_file(
            settings.localization.culture,
            settings.localization.resources_file,
        )
    except (OSError, yaml.YAMLError):
        logger.exception(
            "Failed to load localization resources - using built-in messages",
            path=settings.localization.resources_file,
        )
        return Localizer(settings.localization.culture)


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    app.state.maintenance_service = None

    await shutdown_auth_provider()
    await close_database_pool()
    await close_redis_pools()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Settings stored on ``app.state.settings`` by the factory take precedence
    over the cached global settings.
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    await _startup(app, settings)
    yield
    await _shutdown(app)
