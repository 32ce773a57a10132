# quillblog/middleware/middleware.py
"""
Middleware components for the QuillBlog backend.

This module contains middleware for security headers, request logging
and CORS handling, plus the lifespan event handler for service
initialization and cleanup.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from quillblog.configs import settings
from quillblog.db import close_db, init_db
from quillblog.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
)
from quillblog.utils.helpers import get_summary, host

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    configure_logging()
    logger.info("Starting application", app=app.title, environment=settings.ENVIRONMENT)

    try:
        await init_db()
        settings.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
        logger.info(
            "Services initialized",
            storage_provider=settings.STORAGE_PROVIDER,
            docs="/docs",
            health="/health",
        )
    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info("Shutting down application", app=app.title)
    await close_db()
    logger.info("Services cleaned up successfully")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",  # Next.js development
        "http://127.0.0.1:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        bind_request_id(request_id)
        start_time = perf_counter()

        response = await call_next(request)
        duration_ms = (perf_counter() - start_time) * 1000

        logger.info(
            "Request completed",
            route=get_summary(request) or request.url.path,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            ip=host(request),
        )
        response.headers["X-Request-ID"] = request_id
        clear_context()
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
