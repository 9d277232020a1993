"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
- Configures Prometheus metrics
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from shopadmin import __version__
from shopadmin.api.v1.router import router as v1_router
from shopadmin.core.config import Settings, get_settings
from shopadmin.core.events import lifespan
from shopadmin.core.exceptions import setup_exception_handlers
from shopadmin.core.middleware import LoggingMiddleware, RequestIDMiddleware
from shopadmin.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Shop Admin Service - back-office maintenance API",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_non_production else None,
        redoc_url="/redoc" if settings.is_non_production else None,
        openapi_url="/openapi.json" if settings.is_non_production else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes and lifespan
    app.state.settings = settings

    setup_exception_handlers(app)

    # Middleware order matters - first added = last executed
    _setup_middleware(app, settings)

    _setup_routers(app, settings)

    # Observability (after routes are mounted)
    setup_metrics(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. RequestIDMiddleware (adds request ID and resets log context)
    2. LoggingMiddleware (logs requests/responses)
    3. CORSMiddleware (handles CORS)
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    prefix = settings.api.v1_prefix
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
            "/favicon.ico",
        },
    )

    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers."""
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint returning basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version or __version__,
            "docs": "/docs" if settings.is_non_production else "disabled",
        }
