# src/studygroup_service/api/dependencies.py
from typing import Annotated, AsyncGenerator, Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from studygroup_service.auth.password import PasswordHasher
from studygroup_service.config.settings import Settings, get_settings
from studygroup_service.domain.exceptions import AccountNotFound, AuthError, InvalidCredentials
from studygroup_service.domain.models import Account
from studygroup_service.infrastructure.database import db
from studygroup_service.infrastructure.database.repositories import AccountRepository, TagRepository
from studygroup_service.services import SettingsService


# Type aliases for clean injection
AppSettings = Annotated[Settings, Depends(get_settings)]


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; the service commits its own transactions."""
    async with db.session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_password_hasher(settings: AppSettings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.password_bcrypt_rounds)


async def get_settings_service(
    session: DbSession,
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> SettingsService:
    return SettingsService(
        accounts=AccountRepository(session),
        tags=TagRepository(session),
        password_hasher=password_hasher,
    )


SettingsServiceDep = Annotated[SettingsService, Depends(get_settings_service)]


async def get_current_account(
    service: SettingsServiceDep,
    x_account_nickname: Annotated[Optional[str], Header()] = None,
) -> Account:
    """
    Resolve the signed-in account from the ``X-Account-Nickname`` header.

    Raises:
        AuthError: Header missing or blank
        InvalidCredentials: No account has this nickname
    """
    if not x_account_nickname:
        raise AuthError()

    try:
        return await service.get_profile(x_account_nickname)
    except AccountNotFound:
        raise InvalidCredentials(details={"nickname": x_account_nickname}) from None


CurrentAccount = Annotated[Account, Depends(get_current_account)]
