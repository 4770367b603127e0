"""
Application factory for FastAPI.

This module provides the create_app() function that creates and configures
the FastAPI application instance.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.v1 import api_router
from api.v1.endpoints.auth import limiter
from app.routes import health_router, root_router
from core.config import settings
from core.exceptions import DomainError
from core.instrumentator import instrumentator
from core.lifespan import lifespan
from core.middleware import CorrelationIdMiddleware

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Translate service-layer errors into JSON error responses."""
    log = logger.warning if exc.status_code >= 403 else logger.info
    log(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app() -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application with all necessary
    middleware, routes, and instrumentation.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.api.app_name,
        version=settings.api.app_version,
        description="Waste-fee payments, disputes and citizen records for the kelurahan",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Add rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Domain errors raised by services
    app.add_exception_handler(DomainError, domain_error_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Correlation-ID"],
        expose_headers=["X-Correlation-ID"],
    )

    # Correlation IDs (outermost, so CORS responses carry one too)
    app.add_middleware(CorrelationIdMiddleware)

    # Include routers
    app.include_router(root_router)
    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.api.api_v1_prefix)

    # Instrumentation
    if settings.monitoring.enable_metrics:
        instrumentator.instrument(app)
        instrumentator.expose(app, endpoint="/metrics")

    return app
