"""Standard API response schemas and models."""

from studygroup_service.api.schemas.errors import (
    ErrorCode,
    ErrorDetail,
    FieldError,
)
from studygroup_service.api.schemas.settings import (
    ProfileForm,
    TagForm,
    PasswordForm,
    MessageResponse,
    ProfileResponse,
    TagSettingsResponse,
    PasswordSettingsResponse,
)

__all__ = [
    # Error schemas
    "ErrorCode",
    "ErrorDetail",
    "FieldError",
    # Settings schemas
    "ProfileForm",
    "TagForm",
    "PasswordForm",
    "MessageResponse",
    "ProfileResponse",
    "TagSettingsResponse",
    "PasswordSettingsResponse",
]
