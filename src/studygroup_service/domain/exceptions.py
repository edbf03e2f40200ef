"""
Exception hierarchy for the study group service.

This module provides a structured exception hierarchy that:
- Maps to HTTP status codes
- Includes error codes for programmatic handling
- Supports user-friendly messages
- Provides context for error handling and logging

All exceptions inherit from AppError which provides:
- error_code: Machine-readable error code (from ErrorCode enum)
- status_code: HTTP status code for API responses
- message: Human-readable error message
- details: Optional dictionary with additional context
- suggested_action: Optional user-friendly suggestion for resolution

Usage:
    from studygroup_service.domain.exceptions import (
        AccountNotFound,
        ValidationError,
    )

    # Raise with default message
    raise AccountNotFound()

    # Raise a field-level validation failure
    raise ValidationError(
        "Bio must be 35 characters or fewer",
        field="bio",
        reason="length",
    )
"""

from typing import Any, Optional
from studygroup_service.api.schemas.errors import ErrorCode
from studygroup_service.domain.validation import FieldViolation


class AppError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        error_code: Machine-readable error code (from ErrorCode enum)
        status_code: HTTP status code (default: 500)
        message: Human-readable error message
        details: Optional dictionary with additional error context
        suggested_action: Optional user-friendly suggestion for resolution
    """

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    default_message: str = "An unexpected error occurred"
    default_suggested_action: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggested_action: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        self.suggested_action = suggested_action or self.default_suggested_action
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code.value}, "
            f"status_code={self.status_code}, "
            f"message={self.message!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary with error information
        """
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if self.suggested_action:
            result["suggested_action"] = self.suggested_action

        return result


# ========================================
# Authentication Errors (401)
# ========================================


class AuthError(AppError):
    """Base class for authentication errors."""

    status_code = 401
    error_code = ErrorCode.UNAUTHORIZED
    default_message = "Authentication required"
    default_suggested_action = "Please sign in before changing account settings"


class InvalidCredentials(AuthError):
    """The presented identity does not match a registered account."""

    error_code = ErrorCode.INVALID_CREDENTIALS
    default_message = "Invalid credentials provided"
    default_suggested_action = "Please sign in again with a registered account"


# ========================================
# Validation Errors (400)
# ========================================


class ValidationError(AppError):
    """
    User input violated a settings constraint.

    Carries the offending ``field`` and the ``reason`` (e.g. ``"length"``,
    ``"mismatch"``) so the caller can render a field-level message.
    """

    status_code = 400
    error_code = ErrorCode.VALIDATION_ERROR
    default_message = "Request validation failed"
    default_suggested_action = "Please check your input and try again"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        suggested_action: Optional[str] = None,
        *,
        field: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.field = field
        self.reason = reason
        super().__init__(message, details, suggested_action)

    @classmethod
    def from_violation(cls, violation: FieldViolation) -> "ValidationError":
        return cls(violation.message, field=violation.field, reason=violation.reason)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
            result["reason"] = self.reason
        return result


# ========================================
# Resource Errors (404, 409)
# ========================================


class ResourceError(AppError):
    """Base class for resource-related errors."""

    pass


class NotFound(ResourceError):
    """Resource not found."""

    status_code = 404
    error_code = ErrorCode.NOT_FOUND
    default_message = "Resource not found"
    default_suggested_action = "Please check the resource identifier and try again"


class AccountNotFound(NotFound):
    """No account is registered under the nickname."""

    error_code = ErrorCode.ACCOUNT_NOT_FOUND
    default_message = "Account not found"
    default_suggested_action = "Please verify the nickname is correct"


class TagNotFound(NotFound):
    """An account referenced a tag that is not in the tag store."""

    error_code = ErrorCode.TAG_NOT_FOUND
    default_message = "Tag not found"
    default_suggested_action = "Create the tag before linking it to an account"


# ========================================
# Service Availability Errors (503)
# ========================================


class DatabaseError(AppError):
    """Database operation failed."""

    status_code = 503
    error_code = ErrorCode.DATABASE_UNAVAILABLE
    default_message = "Database operation failed"
    default_suggested_action = "The database is currently unavailable. Please try again later"
