"""
Account settings endpoints.

Every route acts on the account named by the ``X-Account-Nickname``
header. Validation failures answer 400 with field-level details through
the registered error handlers.
"""

from fastapi import APIRouter

from studygroup_service.api.dependencies import CurrentAccount, SettingsServiceDep
from studygroup_service.api.schemas.settings import (
    MessageResponse,
    PasswordForm,
    PasswordSettingsResponse,
    ProfileForm,
    ProfileResponse,
    TagForm,
    TagSettingsResponse,
)

router = APIRouter()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(account: CurrentAccount) -> ProfileResponse:
    return ProfileResponse(nickname=account.nickname, bio=account.bio)


@router.post("/profile", response_model=MessageResponse)
async def update_profile(
    form: ProfileForm,
    account: CurrentAccount,
    service: SettingsServiceDep,
) -> MessageResponse:
    """Replace the bio (at most 35 characters)."""
    result = await service.update_profile(account.nickname, form.bio)
    return MessageResponse(message=result.message)


@router.get("/tags", response_model=TagSettingsResponse)
async def get_tags(account: CurrentAccount, service: SettingsServiceDep) -> TagSettingsResponse:
    """The account's tags and the whitelist of every known title."""
    tag_settings = await service.get_tag_settings(account.nickname)
    return TagSettingsResponse(tags=tag_settings.tags, whitelist=tag_settings.whitelist)


@router.post("/tags/add", response_model=MessageResponse)
async def add_tag(
    form: TagForm,
    account: CurrentAccount,
    service: SettingsServiceDep,
) -> MessageResponse:
    """Attach a tag, creating it if the title is new."""
    result = await service.add_tag(account.nickname, form.tag_title)
    return MessageResponse(message=result.message)


@router.post("/tags/remove", response_model=MessageResponse)
async def remove_tag(
    form: TagForm,
    account: CurrentAccount,
    service: SettingsServiceDep,
) -> MessageResponse:
    result = await service.remove_tag(account.nickname, form.tag_title)
    return MessageResponse(message=result.message)


@router.get("/password", response_model=PasswordSettingsResponse)
async def get_password_settings(account: CurrentAccount) -> PasswordSettingsResponse:
    return PasswordSettingsResponse(nickname=account.nickname)


@router.post("/password", response_model=MessageResponse)
async def update_password(
    form: PasswordForm,
    account: CurrentAccount,
    service: SettingsServiceDep,
) -> MessageResponse:
    """Replace the password; ``newPasswordConfirm`` must match exactly."""
    result = await service.update_password(
        account.nickname,
        form.new_password,
        form.new_password_confirm,
    )
    return MessageResponse(message=result.message)
