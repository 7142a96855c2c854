"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers and rate limiting
- Mounts API routers
- Configures metrics
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from restaurant_reviews.api.v1.router import router as v1_router
from restaurant_reviews.cache.rate_limit import setup_rate_limiting
from restaurant_reviews.core.config import Settings, get_settings
from restaurant_reviews.core.events import lifespan
from restaurant_reviews.core.exceptions import setup_exception_handlers
from restaurant_reviews.core.middleware import LoggingMiddleware, RequestIDMiddleware
from restaurant_reviews.observability.metrics import setup_metrics


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Restaurant directory and review API",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        debug=settings.app.debug,
    )

    app.state.settings = settings

    setup_rate_limiting(app)
    setup_exception_handlers(app)
    _setup_middleware(app, settings)

    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    # After routes are mounted
    setup_metrics(app)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware is executed in reverse order of addition. From the request's
    perspective: RequestIDMiddleware, LoggingMiddleware, CORSMiddleware.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
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
