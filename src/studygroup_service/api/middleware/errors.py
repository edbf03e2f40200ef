"""
Error handling for FastAPI.

This module provides:
- Exception handlers for all AppError subclasses
- Structured error responses with error codes
- Request ID tracking in error responses
- Field-level details for settings validation failures
- Production-safe error messages (hides internal details)

Usage:
    from fastapi import FastAPI
    from studygroup_service.api.middleware.errors import register_error_handlers

    app = FastAPI()
    register_error_handlers(app)
"""

import uuid
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from studygroup_service.api.schemas.errors import ErrorCode, ErrorDetail, FieldError
from studygroup_service.config.settings import get_settings
from studygroup_service.domain.exceptions import AppError, ValidationError
from studygroup_service.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


def _get_request_id(request: Request) -> str:
    """Request ID set by RequestIDMiddleware, the incoming header, or a new one."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id

    request_id = request.headers.get("x-request-id")
    if request_id:
        return request_id

    return str(uuid.uuid4())


def _create_error_response(
    error_code: ErrorCode,
    message: str,
    request_id: str,
    status_code: int,
    details: Optional[list[FieldError]] = None,
    context: Optional[dict[str, Any]] = None,
    suggested_action: Optional[str] = None,
    is_production: bool = False,
) -> JSONResponse:
    """
    Create standardized error response.

    Args:
        error_code: Machine-readable error code
        message: Human-readable error message
        request_id: Request ID for tracing
        status_code: HTTP status code
        details: Optional field-level error details
        context: Optional additional context
        suggested_action: Optional user-friendly suggestion
        is_production: Whether running in production (hides internal details)

    Returns:
        JSONResponse with error information
    """
    if is_production and status_code >= 500:
        message = "An internal error occurred. Please try again later."
        context = None

    error_detail = ErrorDetail(
        code=error_code,
        message=message,
        details=details,
        context=context,
    )

    response_content: dict[str, Any] = {
        "error": error_detail.model_dump(mode="json", exclude_none=True),
        "request_id": request_id,
    }

    if suggested_action:
        response_content["suggested_action"] = suggested_action

    return JSONResponse(
        status_code=status_code,
        content=response_content,
    )


def _log_error(request: Request, error: AppError, request_id: str) -> None:
    log_context = {
        "request_id": request_id,
        "path": request.url.path,
        "method": request.method,
        "status_code": error.status_code,
        "error_code": error.error_code.value,
    }

    if error.status_code >= 500:
        logger.error("Server error", error=error.message, **log_context)
    elif error.status_code in (401, 403):
        logger.warning("Authentication error", error=error.message, **log_context)
    else:
        logger.info("Client error", error=error.message, **log_context)


def _field_errors(exc: AppError) -> Optional[list[FieldError]]:
    if isinstance(exc, ValidationError) and exc.field:
        return [
            FieldError(
                field=exc.field,
                message=exc.message,
                code=exc.reason.upper() if exc.reason else None,
            )
        ]
    return None


def register_error_handlers(app: FastAPI) -> None:
    """
    Register all error handlers for the FastAPI application.

    This should be called during application initialization.
    """
    settings = get_settings()

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """
        Handle all AppError subclass exceptions.

        Settings validation failures carry their field and reason into
        ``error.details``.
        """
        request_id = _get_request_id(request)
        _log_error(request, exc, request_id)

        return _create_error_response(
            error_code=exc.error_code,
            message=exc.message,
            request_id=request_id,
            status_code=exc.status_code,
            details=_field_errors(exc),
            context=exc.details if exc.details else None,
            suggested_action=exc.suggested_action,
            is_production=settings.is_production,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle FastAPI request validation errors.

        Input values are never echoed back; request bodies may hold passwords.
        """
        request_id = _get_request_id(request)

        error_detail = ErrorDetail.from_validation_error(exc.errors())
        field_errors = error_detail.details or []

        logger.info(
            "Request validation failed",
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            field_count=len(field_errors),
        )

        return _create_error_response(
            error_code=error_detail.code,
            message=error_detail.message,
            request_id=request_id,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=field_errors,
            suggested_action="Please check your input and ensure all required fields are provided correctly",
            is_production=settings.is_production,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle all unhandled exceptions; details are hidden in production."""
        request_id = _get_request_id(request)

        logger.error(
            "Unhandled exception",
            request_id=request_id,
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            exc_info=exc,
        )

        error_message = "An unexpected error occurred"
        context = None
        if not settings.is_production:
            error_message = f"An unexpected error occurred: {exc}"
            context = {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            }

        return _create_error_response(
            error_code=ErrorCode.INTERNAL_ERROR,
            message=error_message,
            request_id=request_id,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            context=context,
            suggested_action="Please try again later. If the problem persists, contact support",
            is_production=settings.is_production,
        )
