import logging
import uuid
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from mediastacks.api import favorites, search
from mediastacks.errors import (
    ConfigError,
    FavoritesError,
    MediaStacksError,
    UpstreamError,
)
from mediastacks.errors import ValidationError as QueryValidationError
from mediastacks.providers.registry import AdapterRegistry
from mediastacks.schemas.error import ErrorType, ValidationErrorDetail
from mediastacks.services.favorites import build_storage
from mediastacks.settings import AppSettings, get_settings
from mediastacks.utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    error_type_for,
    status_code_for,
)
from mediastacks.utils.request_context import get_request_id, set_request_id

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _validate_environment(active_settings: AppSettings | None = None) -> None:
    """Log a warning block for every configuration gap found at startup."""

    candidate = active_settings or settings
    warnings = candidate.optional_config_warnings()

    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def validate_environment() -> None:
    """Public wrapper ensuring CLI tools can trigger configuration validation."""

    _validate_environment()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create shared clients on startup and release them on shutdown."""
    validate_environment()

    logger.info("=" * 60)
    logger.info("Media Stacks API - Startup")
    logger.info("=" * 60)
    logger.info(f"Favorites backend: {settings.favorites_backend.upper()}")

    from mediastacks.cache import close_redis

    # Storage first: a failed Redis connect must not leave an open HTTP client.
    app.state.favorites_storage = await build_storage(settings)
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.upstream_timeout_seconds)
    )
    app.state.adapter_registry = AdapterRegistry.from_settings(settings, http_client)

    try:
        yield
    finally:
        logger.info("Shutting down Media Stacks API")
        await http_client.aclose()
        await close_redis()


app = FastAPI(
    title="Media Stacks API",
    version="0.1.0",
    description="Unified search over movie, book and album catalogs plus favorites.",
    lifespan=lifespan,
    redirect_slashes=False,
)

allow_origins = settings.cors_allow_origins
logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware to add request ID to each request
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# Exception handlers
@app.exception_handler(MediaStacksError)
async def media_stacks_exception_handler(request: Request, exc: MediaStacksError):
    """Translate core errors into short status messages."""
    status_code = status_code_for(exc)
    upstream_status: int | None = None

    if isinstance(exc, ConfigError):
        logger.error(
            "Provider configuration error for request %s to %s: %s",
            get_request_id(),
            request.url.path,
            exc.message,
        )
    elif isinstance(exc, UpstreamError):
        upstream_status = exc.status
        logger.warning(
            "Upstream failure for request %s to %s: status=%s details=%.1000s",
            get_request_id(),
            request.url.path,
            exc.status,
            exc.details,
        )
    elif isinstance(exc, (QueryValidationError, FavoritesError)):
        logger.info(
            "Rejected request %s to %s: %s",
            get_request_id(),
            request.url.path,
            exc.message,
        )

    error_response = build_error_response(
        error_type=error_type_for(exc),
        message=exc.message,
        status_code=status_code,
        path=str(request.url.path),
        upstream_status=upstream_status,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(
    request: Request, exc: PydanticValidationError
):
    """Handle Pydantic validation errors."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Pydantic validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Data validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.get("/api/health", tags=["system"])
async def healthcheck() -> dict[str, bool]:
    """Simple health endpoint for readiness checks."""
    return {"ok": True}


app.include_router(search.router, prefix="/api/search", tags=["search"])
app.include_router(favorites.router, prefix="/api/favorites", tags=["favorites"])
