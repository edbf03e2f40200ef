"""
Explicit validation rules for account settings input.

Each validator returns a FieldViolation describing the first failed
constraint, or None when the input is acceptable. Callers decide how to
surface the violation (the settings service raises ValidationError).
"""

from dataclasses import dataclass

BIO_MAX_LENGTH = 35

REASON_LENGTH = "length"
REASON_MISMATCH = "mismatch"


@dataclass(frozen=True)
class FieldViolation:
    """A single field that failed a single constraint."""
    field: str
    reason: str
    message: str


def validate_profile(bio: str | None) -> FieldViolation | None:
    """Check a candidate bio. ``None`` clears the bio and is always valid."""
    if bio is not None and len(bio) > BIO_MAX_LENGTH:
        return FieldViolation(
            field="bio",
            reason=REASON_LENGTH,
            message=f"Bio must be {BIO_MAX_LENGTH} characters or fewer",
        )
    return None


def validate_password_change(
    new_password: str,
    new_password_confirm: str,
) -> FieldViolation | None:
    """Check that the confirmation repeats the new password exactly."""
    if new_password != new_password_confirm:
        return FieldViolation(
            field="newPasswordConfirm",
            reason=REASON_MISMATCH,
            message="New password and confirmation do not match",
        )
    return None
