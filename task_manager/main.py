"""
FastAPI application entry point.
Mounts routes, middleware (CORS, request logging, Prometheus), exception handlers and the
startup hook that creates missing tables.
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_manager.api.endpoints import health
from task_manager.api.responses import error_response
from task_manager.api.router import AVAILABLE_ROUTES, api_router
from task_manager.config import get_settings
from task_manager.core.errors import ApiError, ValidationFailed
from task_manager.db.session import init_models
from task_manager.logging_setup import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create tables that do not exist yet."""
    await init_models()
    logger.info("Database schema ready")
    yield


async def api_error_handler(request: Request, exc: ApiError):
    errors = exc.errors if isinstance(exc, ValidationFailed) else None
    return error_response(exc.message, exc.status_code, errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return error_response(
            f"Route {request.url.path} not found",
            404,
            availableRoutes=AVAILABLE_ROUTES,
        )
    return error_response(str(exc.detail), exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """500 with a generic message in production, the exception text otherwise."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    settings = get_settings()
    if settings.is_production:
        message = "Something went wrong"
    else:
        message = str(exc) or "Internal server error"
    return error_response(message, 500)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Users and their tasks: CRUD, filtering and pagination.",
        version=settings.version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    if settings.is_development:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            return response

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router, tags=["health"])
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
