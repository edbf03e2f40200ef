"""Error response schemas and error codes."""

from enum import Enum
from typing import Any
from pydantic import BaseModel, Field

# Friendlier messages for common pydantic error types
_FRIENDLY_MESSAGES = {
    "missing": "This field is required",
    "string_type": "Must be a valid string",
    "json_invalid": "Request body must be valid JSON",
    "model_attributes_type": "Request body must be a JSON object",
}


class ErrorCode(str, Enum):
    """Machine-readable codes carried in ``error.code``."""

    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # 401
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # 404
    NOT_FOUND = "NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    TAG_NOT_FOUND = "TAG_NOT_FOUND"

    # 500
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # 503
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"


class FieldError(BaseModel):
    """One failed field. The submitted value is never included."""

    model_config = {"str_strip_whitespace": True}

    field: str = Field(
        ...,
        description="Field name or path",
        examples=["bio", "newPasswordConfirm", "body.tagTitle"]
    )
    message: str = Field(..., examples=["Bio must be 35 characters or fewer"])
    code: str | None = Field(default=None, examples=["LENGTH", "MISMATCH", "MISSING"])


class ErrorDetail(BaseModel):
    """
    Body of the ``error`` key in every error response.

    Example:
        ```python
        ErrorDetail(
            code=ErrorCode.VALIDATION_ERROR,
            message="Bio must be 35 characters or fewer",
            details=[FieldError(field="bio", message="...", code="LENGTH")],
        )
        ```
    """

    model_config = {"str_strip_whitespace": True}

    code: ErrorCode
    message: str
    details: list[FieldError] | None = Field(
        default=None,
        description="Field-level errors, for validation failures",
    )
    context: dict[str, Any] | None = Field(
        default=None,
        description="Additional error context",
        examples=[{"nickname": "jordan"}]
    )

    @classmethod
    def from_validation_error(
        cls,
        validation_errors: list[dict[str, Any]]
    ) -> "ErrorDetail":
        """
        Build a VALIDATION_ERROR detail from pydantic error dicts.

        Only ``loc`` and ``type`` are read, so input values never leak
        into the response.
        """
        field_errors = []
        for err in validation_errors:
            error_type = err.get("type", "")
            field_errors.append(
                FieldError(
                    field=".".join(str(loc) for loc in err.get("loc", [])),
                    message=_FRIENDLY_MESSAGES.get(error_type, err.get("msg", "Validation error")),
                    code=error_type.upper().replace(".", "_"),
                )
            )

        return cls(
            code=ErrorCode.VALIDATION_ERROR,
            message="Request validation failed",
            details=field_errors
        )
