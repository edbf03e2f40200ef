"""Request and response schemas for the account settings endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProfileForm(BaseModel):
    """
    Profile update request.

    Length is checked by the settings service, not here, so an over-long
    bio answers with the same field-level error the service raises.
    """

    bio: Optional[str] = Field(
        default=None,
        description="Short self-introduction, at most 35 characters. null clears it.",
        examples=["Graph theory and bad puns"],
    )


class TagForm(BaseModel):
    """Tag add/remove request."""

    model_config = ConfigDict(populate_by_name=True)

    tag_title: str = Field(
        ...,
        alias="tagTitle",
        description="Tag title (case-sensitive)",
        examples=["newTag"],
    )


class PasswordForm(BaseModel):
    """Password change request."""

    model_config = ConfigDict(populate_by_name=True)

    new_password: str = Field(..., alias="newPassword", description="New password")
    new_password_confirm: str = Field(
        ...,
        alias="newPasswordConfirm",
        description="Must equal newPassword exactly",
    )


class MessageResponse(BaseModel):
    """Confirmation returned by every successful settings change."""

    message: str = Field(..., examples=["Profile updated."])


class ProfileResponse(BaseModel):
    nickname: str
    bio: Optional[str] = None


class TagSettingsResponse(BaseModel):
    """The account's tags and every known title for autocompletion."""

    tags: list[str] = Field(default_factory=list, examples=[["algorithms", "newTag"]])
    whitelist: list[str] = Field(default_factory=list, examples=[["algorithms", "graphs", "newTag"]])


class PasswordSettingsResponse(BaseModel):
    """Password form view; the credential itself is never returned."""

    nickname: str
