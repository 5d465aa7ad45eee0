"""Back-office API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backoffice.api import categories_router, dashboard_router, health_router, products_router
from backoffice.api.middleware import error_body, setup_middleware
from backoffice.infrastructure.config import settings
from backoffice.infrastructure.database import engine
from backoffice.infrastructure.logging import configure_logging

configure_logging(settings.log_level)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting back-office API",
        version=settings.api_version,
        debug=settings.debug,
    )

    yield

    logger.info("Shutting down back-office API")
    await engine.dispose()


app = FastAPI(
    title="Back-Office API",
    description="Supermarket product catalog and inventory back-office",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID correlation and last-resort error handling
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(dashboard_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTP errors, including converted domain errors, in the standard format."""
    detail = exc.detail
    if isinstance(detail, dict):
        content = error_body(
            detail.get("error_code", "ERROR"),
            detail.get("message", str(detail)),
            getattr(request.state, "request_id", None),
            detail.get("details"),
        )
    else:
        content = error_body("ERROR", str(detail), getattr(request.state, "request_id", None))

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies and query parameters per field."""
    details = []
    for error in exc.errors():
        # loc looks like ("body", "unit_price")
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append(
            {
                "field": ".".join(location) or None,
                "message": error.get("msg", "Invalid value"),
            }
        )

    return JSONResponse(
        status_code=422,
        content=error_body(
            "VALIDATION_ERROR",
            "Request validation failed",
            getattr(request.state, "request_id", None),
            details,
        ),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return JSONResponse(
        status_code=500,
        content=error_body(
            "INTERNAL_ERROR",
            "An internal error occurred",
            getattr(request.state, "request_id", None),
        ),
    )
