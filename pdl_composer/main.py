import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pdl_composer.api.routes.fields import router as fields_router
from pdl_composer.api.routes.health import router as health_router
from pdl_composer.api.routes.nodes import router as nodes_router
from pdl_composer.api.routes.rules import router as rules_router
from pdl_composer.core.config import settings
from pdl_composer.core.errors import ComposerError, get_status_code
from pdl_composer.core.observability import (
    ObservabilityMiddleware,
    configure_structured_logging,
    extract_request_context,
    metrics_endpoint,
)

# Configure structured logging before creating logger
if settings.observability_structured_logs:
    configure_structured_logging(settings.app_log_level)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Detail keys that may carry filesystem locations
_SENSITIVE_DETAIL_KEYS = frozenset({"file_path"})


def _sanitize_error_details(details: dict[str, Any]) -> dict[str, Any]:
    """
    Sanitize error details to prevent information leakage in production.

    Args:
        details: Original error details dictionary

    Returns:
        Sanitized details dictionary
    """
    if settings.app_env != "prod":
        return details

    sanitized = {}
    for key, value in details.items():
        if key in _SENSITIVE_DETAIL_KEYS:
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = _sanitize_error_details(value)
        else:
            sanitized[key] = value
    return sanitized


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Sets up:
    - Observability middleware (metrics, request tracking)
    - CORS middleware
    - Exception handlers for domain errors
    - API routers
    - Metrics endpoint for Prometheus scraping
    """
    app = FastAPI(
        title="PDL Composer API",
        description="Compose boolean policy conditions and render them as PDL rules",
        version="0.1.0",
    )

    if settings.observability_enabled:
        app.add_middleware(
            ObservabilityMiddleware, header_name=settings.observability_request_id_header
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============================================================================
    # Exception Handlers
    # ============================================================================

    @app.exception_handler(ComposerError)
    async def composer_error_handler(request: Request, exc: ComposerError) -> JSONResponse:
        """
        Handle domain-specific errors.

        Maps domain exceptions to HTTP status codes and returns structured
        error responses.
        """
        status_code = get_status_code(exc)

        context = {
            "details": exc.details,
            "path": request.url.path,
            **extract_request_context(request),
        }

        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__}: {exc.message}", extra=context)
        else:
            logger.warning(f"{exc.__class__.__name__}: {exc.message}", extra=context)

        return JSONResponse(
            status_code=status_code,
            content={
                "error": exc.__class__.__name__,
                "message": exc.message,
                "details": _sanitize_error_details(exc.details),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Provide a consistent error response format for HTTP exceptions."""
        if exc.status_code >= 500:
            logger.error(
                f"HTTP {exc.status_code}: {exc.detail}",
                extra={"path": request.url.path, **extract_request_context(request)},
            )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "HTTPException",
                "message": exc.detail,
                "details": {},
            },
        )

    # ============================================================================
    # Routers
    # ============================================================================

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(fields_router, prefix=API_PREFIX)
    app.include_router(nodes_router, prefix=API_PREFIX)
    app.include_router(rules_router, prefix=API_PREFIX)

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return metrics_endpoint()

    return app


app = create_app()
