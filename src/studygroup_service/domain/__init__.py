"""Domain models, validation rules, and exceptions."""

from studygroup_service.domain.exceptions import (
    AppError,
    AuthError,
    InvalidCredentials,
    ValidationError,
    ResourceError,
    NotFound,
    AccountNotFound,
    TagNotFound,
    DatabaseError,
)
from studygroup_service.domain.models import Account, Tag, TagSettings, SettingsResult
from studygroup_service.domain.validation import (
    BIO_MAX_LENGTH,
    FieldViolation,
    validate_profile,
    validate_password_change,
)

__all__ = [
    # Base exceptions
    "AppError",
    "AuthError",
    "ResourceError",
    # Authentication errors (401)
    "InvalidCredentials",
    # Validation errors (400)
    "ValidationError",
    # Resource errors (404)
    "NotFound",
    "AccountNotFound",
    "TagNotFound",
    # Availability errors (503)
    "DatabaseError",
    # Entities
    "Account",
    "Tag",
    "TagSettings",
    "SettingsResult",
    # Validation
    "BIO_MAX_LENGTH",
    "FieldViolation",
    "validate_profile",
    "validate_password_change",
]
