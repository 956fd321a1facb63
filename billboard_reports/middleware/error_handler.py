"""Global error handling middleware.

This module provides centralized exception handling with
structured JSON responses and request tracking. Every error body has the
shape ``{"message": str, "details": dict, "request_id": str}``.
"""

import logging
import traceback
import uuid
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from billboard_reports.core.exceptions import AppException, format_validation_errors

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    message: str,
    request_id: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "message": message,
            "details": details or {},
            "request_id": request_id,
        },
        headers={"X-Request-ID": request_id},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for catching and formatting all exceptions.

    Converts exceptions to structured JSON responses with
    request IDs for debugging and correlation. Unexpected errors are
    logged with their traceback; the client only sees a generic message.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Process request and handle any exceptions.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in chain.

        Returns:
            Response from handler or error response.
        """
        # Generate unique request ID for tracing
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        except AppException as exc:
            logger.warning(
                f"Application error: {exc.message} "
                f"(request_id={request_id}, status={exc.status_code})"
            )
            return error_response(exc.status_code, exc.message, request_id, exc.details)

        except Exception as exc:
            logger.error(
                f"Unhandled exception on {request.method} {request.url.path}: {exc!r} "
                f"(request_id={request_id})\n{traceback.format_exc()}"
            )
            return error_response(500, "Internal server error", request_id)


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers for the FastAPI app.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        """Handle AppException with structured response.

        Args:
            request: Incoming HTTP request.
            exc: Application exception instance.

        Returns:
            JSON response with error details.
        """
        request_id = getattr(request.state, "request_id", "unknown")
        if exc.status_code >= 500:
            logger.error(f"Application error: {exc.message} (request_id={request_id})")
        else:
            logger.warning(
                f"Application error: {exc.message} "
                f"(request_id={request_id}, status={exc.status_code})"
            )
        return error_response(exc.status_code, exc.message, request_id, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed bodies and query values as 400 with field errors."""
        request_id = getattr(request.state, "request_id", "unknown")
        errors = format_validation_errors(exc.errors())
        logger.warning(f"Request validation failed (request_id={request_id}): {errors}")
        return error_response(400, "Validation failed", request_id, {"errors": errors})
