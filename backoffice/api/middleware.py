"""HTTP middleware for the back-office API.

Provides:
- Request ID correlation across logs, handlers and responses
- A last-resort handler that turns escaped exceptions into the
  standard error body
"""

import time
from typing import Any, Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from backoffice.domain.exceptions import StorageError

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def error_body(
    error_code: str,
    message: str,
    request_id: str | None,
    details: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build the standard error response body.

    Args:
        error_code: Machine-readable error code.
        message: Human-readable message.
        request_id: Correlation ID of the failing request.
        details: Per-field details, if any.

    Returns:
        JSON-serializable body matching ErrorResponse.
    """
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": request_id,
    }


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlate every request with an ID.

    The ID comes from the X-Request-ID header when the client sends one.
    It is stored on request.state, bound into the structlog context for
    the duration of the request and echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)

            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert exceptions that escaped the routers.

    Storage failures become 503 STORAGE_ERROR; anything else is a
    500 INTERNAL_ERROR without internal detail.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle errors uniformly.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or error response.
        """
        try:
            return await call_next(request)
        except (StorageError, SQLAlchemyError) as e:
            logger.error(
                "Storage failure outside catalog service",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=error_body(
                    "STORAGE_ERROR",
                    "Storage is unavailable",
                    getattr(request.state, "request_id", None),
                ),
            )
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body(
                    "INTERNAL_ERROR",
                    "An internal error occurred",
                    getattr(request.state, "request_id", None),
                ),
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    The last middleware added runs first, so request IDs are assigned
    before the error handler can need one.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
